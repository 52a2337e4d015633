"""Transfer API schemas. Facts only; display text is the caller's concern."""

from datetime import datetime

from pydantic import BaseModel

from casehub.application.dtos.transfer import TransferFact, TransferView
from casehub.domain.entities.transfer import TransferEntity
from casehub.domain.value_objects.core import WorldRef


class WorldRefResponse(BaseModel):
    id: str
    code: str
    name: str

    @classmethod
    def from_ref(cls, ref: WorldRef | None) -> "WorldRefResponse | None":
        if ref is None:
            return None
        return cls(id=ref.id, code=ref.code, name=ref.name)


class TransferFactResponse(BaseModel):
    transfer_id: str
    transfer_type: str
    transferred_at: datetime
    counterpart: WorldRefResponse | None = None

    @classmethod
    def from_fact(cls, fact: TransferFact | None) -> "TransferFactResponse | None":
        if fact is None:
            return None
        return cls(
            transfer_id=fact.transfer_id,
            transfer_type=fact.transfer_type,
            transferred_at=fact.transferred_at,
            counterpart=WorldRefResponse.from_ref(fact.counterpart),
        )


class TransferViewResponse(BaseModel):
    """Response for GET .../dossiers/{dossier_id}/transfers."""

    dossier_id: str
    is_incoming: bool
    is_outgoing: bool
    most_recent_incoming: TransferFactResponse | None = None
    most_recent_outgoing: TransferFactResponse | None = None
    skipped: int = 0

    @classmethod
    def from_view(cls, view: TransferView) -> "TransferViewResponse":
        return cls(
            dossier_id=view.dossier_id,
            is_incoming=view.is_incoming,
            is_outgoing=view.is_outgoing,
            most_recent_incoming=TransferFactResponse.from_fact(view.most_recent_incoming),
            most_recent_outgoing=TransferFactResponse.from_fact(view.most_recent_outgoing),
            skipped=view.skipped,
        )


class TransferRecordResponse(BaseModel):
    """One completed transfer in a dossier's history."""

    id: str
    transfer_type: str
    transfer_status: str
    transferred_at: datetime | None
    source_dossier_id: str
    target_dossier_id: str
    source_world: WorldRefResponse | None = None
    target_world: WorldRefResponse | None = None

    @classmethod
    def from_entity(cls, transfer: TransferEntity) -> "TransferRecordResponse":
        return cls(
            id=transfer.id,
            transfer_type=transfer.transfer_type,
            transfer_status=transfer.status.value,
            transferred_at=transfer.transferred_at,
            source_dossier_id=transfer.source_dossier_id,
            target_dossier_id=transfer.target_dossier_id,
            source_world=WorldRefResponse.from_ref(transfer.source_world),
            target_world=WorldRefResponse.from_ref(transfer.target_world),
        )
