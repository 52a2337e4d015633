"""Tests for domain exception codes and serialization."""

from casehub.domain.exceptions import (
    AuthorizationException,
    CasehubException,
    InvalidTransferTransition,
    RetrievalFailure,
)


def test_base_exception_defaults_error_code_to_class_name() -> None:
    exc = CasehubException("boom")
    assert exc.error_code == "CasehubException"
    assert exc.details == {}


def test_to_dict() -> None:
    exc = RetrievalFailure("dossier_transfers", "timeout")
    assert exc.to_dict() == {
        "error": "RETRIEVAL_FAILURE",
        "message": "Could not retrieve records from dossier_transfers: timeout",
        "details": {"collection": "dossier_transfers", "reason": "timeout"},
    }


def test_authorization_exception_carries_world_code() -> None:
    exc = AuthorizationException(message="No access to world JDE", world_code="JDE")
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.details == {"world_code": "JDE"}


def test_authorization_exception_resource_action_message() -> None:
    exc = AuthorizationException(resource="administration", action="read")
    assert exc.message == "Permission denied: read on administration"


def test_invalid_transition_details() -> None:
    exc = InvalidTransferTransition("tr-1", "completed", "cancelled")
    assert exc.error_code == "INVALID_TRANSITION"
    assert exc.details["target"] == "cancelled"
