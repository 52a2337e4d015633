"""Tests for domain entities (WorldEntity, TransferEntity) and enums (Role, TransferStatus)."""

from datetime import datetime, timezone

import pytest

from casehub.domain.entities.transfer import TransferEntity
from casehub.domain.entities.world import WorldEntity
from casehub.domain.enums import Role, TransferDirection, TransferStatus
from casehub.domain.exceptions import (
    InconsistentTransfer,
    InvalidTransferTransition,
    ValidationException,
)
from casehub.domain.value_objects.core import WorldCode, WorldRef

T0 = datetime(2025, 3, 1, 8, 0, 0, tzinfo=timezone.utc)


def _transfer(**overrides) -> TransferEntity:
    fields = {
        "id": "tr-1",
        "transfer_type": "reassignment",
        "status": TransferStatus.SCHEDULED,
        "source_dossier_id": "d-src",
        "target_dossier_id": "d-dst",
        "source_world_id": "w-a",
        "target_world_id": "w-b",
    }
    fields.update(overrides)
    return TransferEntity(**fields)


class TestRole:
    def test_values_returns_all_role_strings(self) -> None:
        assert Role.values() == ["superadmin", "admin", "editor", "viewer"]

    def test_parse_known_role(self) -> None:
        assert Role.parse("editor") is Role.EDITOR

    def test_parse_unknown_role_returns_none(self) -> None:
        assert Role.parse("auditor") is None
        assert Role.parse("Editor") is None
        assert Role.parse("") is None


class TestTransferStatus:
    def test_terminal_states(self) -> None:
        assert TransferStatus.COMPLETED.is_terminal
        assert TransferStatus.CANCELLED.is_terminal
        assert not TransferStatus.SCHEDULED.is_terminal

    def test_values(self) -> None:
        assert set(TransferStatus.values()) == {"scheduled", "completed", "cancelled"}


class TestWorldEntity:
    def test_has_code_is_case_sensitive(self) -> None:
        world = WorldEntity(id="w-1", code=WorldCode("JDE"), name="JDE")
        assert world.has_code("JDE")
        assert not world.has_code("jde")

    def test_ref(self) -> None:
        world = WorldEntity(id="w-1", code=WorldCode("JDE"), name="Justice")
        assert world.ref() == WorldRef(id="w-1", code="JDE", name="Justice")

    def test_empty_name_raises(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            WorldEntity(id="w-1", code=WorldCode("JDE"), name="  ")
        assert exc_info.value.details["field"] == "name"

    def test_empty_id_raises(self) -> None:
        with pytest.raises(ValidationException):
            WorldEntity(id="", code=WorldCode("JDE"), name="JDE")


class TestTransferInvariants:
    def test_same_source_and_target_world_is_inconsistent(self) -> None:
        with pytest.raises(InconsistentTransfer) as exc_info:
            _transfer(target_world_id="w-a")
        assert exc_info.value.error_code == "INCONSISTENT_TRANSFER"
        assert exc_info.value.details["transfer_id"] == "tr-1"

    def test_completed_without_timestamp_is_inconsistent(self) -> None:
        with pytest.raises(InconsistentTransfer):
            _transfer(status=TransferStatus.COMPLETED, transferred_at=None)

    def test_missing_world_reference_is_inconsistent(self) -> None:
        with pytest.raises(InconsistentTransfer):
            _transfer(source_world_id="")

    def test_missing_dossier_id_raises_validation(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            _transfer(target_dossier_id="")
        assert exc_info.value.details["field"] == "target_dossier_id"

    def test_naive_timestamp_is_normalized_to_utc(self) -> None:
        t = _transfer(status=TransferStatus.COMPLETED, transferred_at=datetime(2025, 3, 1, 8, 0))
        assert t.transferred_at == T0

    def test_same_dossier_id_on_both_sides_is_allowed(self) -> None:
        t = _transfer(source_dossier_id="d-1", target_dossier_id="d-1")
        assert t.is_incoming_for("d-1")
        assert t.is_outgoing_for("d-1")


class TestTransferLifecycle:
    def test_complete_sets_status_and_time(self) -> None:
        t = _transfer()
        t.complete(at=T0)
        assert t.status == TransferStatus.COMPLETED
        assert t.transferred_at == T0
        assert t.is_completed

    def test_complete_defaults_to_now(self) -> None:
        t = _transfer()
        t.complete()
        assert t.transferred_at is not None
        assert t.transferred_at.tzinfo is not None

    def test_cancel_scheduled(self) -> None:
        t = _transfer()
        t.cancel()
        assert t.status == TransferStatus.CANCELLED
        assert t.transferred_at is None

    @pytest.mark.parametrize(
        "status", [TransferStatus.COMPLETED, TransferStatus.CANCELLED]
    )
    def test_terminal_states_reject_transitions(self, status: TransferStatus) -> None:
        t = _transfer(status=status, transferred_at=T0)
        with pytest.raises(InvalidTransferTransition) as exc_info:
            t.complete(at=T0)
        assert exc_info.value.details["current"] == status.value
        with pytest.raises(InvalidTransferTransition):
            t.cancel()
        assert t.status == status


class TestTransferDirection:
    def test_counterpart_by_direction(self) -> None:
        src = WorldRef(id="w-a", code="A", name="World A")
        dst = WorldRef(id="w-b", code="B", name="World B")
        t = _transfer(source_world=src, target_world=dst)
        assert t.counterpart(TransferDirection.INCOMING) == src
        assert t.counterpart(TransferDirection.OUTGOING) == dst

    def test_touches(self) -> None:
        t = _transfer()
        assert t.touches("d-src")
        assert t.touches("d-dst")
        assert not t.touches("d-other")
