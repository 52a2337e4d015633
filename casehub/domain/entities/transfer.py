"""Transfer domain entity.

A transfer moves (or copies) a dossier from a source world to a target
world. Lifecycle: scheduled -> completed | cancelled; both end states are
terminal and the record is immutable history afterwards.
"""

from dataclasses import dataclass
from datetime import datetime

from casehub.domain.enums import TransferDirection, TransferStatus
from casehub.domain.exceptions import (
    InconsistentTransfer,
    InvalidTransferTransition,
    ValidationException,
)
from casehub.domain.value_objects.core import WorldRef
from casehub.shared.utils.datetime import ensure_utc, utc_now


@dataclass
class TransferEntity:
    """Domain entity for a dossier transfer between two worlds.

    Source and target dossier ids may be equal (the same dossier re-homed)
    or differ (a copy created in the target world). Construction raises
    ValidationException for missing identifiers and InconsistentTransfer
    when the record breaks a cross-world invariant.
    """

    id: str
    transfer_type: str
    status: TransferStatus
    source_dossier_id: str
    target_dossier_id: str
    source_world_id: str
    target_world_id: str
    transferred_at: datetime | None = None
    source_world: WorldRef | None = None
    target_world: WorldRef | None = None

    def __post_init__(self) -> None:
        self.transferred_at = ensure_utc(self.transferred_at)
        self.validate()

    def validate(self) -> None:
        """Validate identifiers and cross-world invariants."""
        if not self.id:
            raise ValidationException("Transfer ID is required", field="id")
        if not self.source_dossier_id:
            raise ValidationException(
                "Source dossier ID is required", field="source_dossier_id"
            )
        if not self.target_dossier_id:
            raise ValidationException(
                "Target dossier ID is required", field="target_dossier_id"
            )
        if not self.source_world_id or not self.target_world_id:
            raise InconsistentTransfer(self.id, "missing world reference")
        if self.source_world_id == self.target_world_id:
            raise InconsistentTransfer(self.id, "same source and target world")
        if self.status == TransferStatus.COMPLETED and self.transferred_at is None:
            raise InconsistentTransfer(self.id, "completed without transferred_at")

    @property
    def is_completed(self) -> bool:
        return self.status == TransferStatus.COMPLETED

    def complete(self, at: datetime | None = None) -> None:
        """Mark the transfer completed at the given time (default: now).

        Raises:
            InvalidTransferTransition: If the transfer is not SCHEDULED.
        """
        self._require_scheduled(TransferStatus.COMPLETED)
        self.transferred_at = ensure_utc(at) if at is not None else utc_now()
        self.status = TransferStatus.COMPLETED

    def cancel(self) -> None:
        """Void a scheduled transfer.

        Raises:
            InvalidTransferTransition: If the transfer is not SCHEDULED.
        """
        self._require_scheduled(TransferStatus.CANCELLED)
        self.status = TransferStatus.CANCELLED

    def _require_scheduled(self, target: TransferStatus) -> None:
        if self.status != TransferStatus.SCHEDULED:
            raise InvalidTransferTransition(self.id, self.status.value, target.value)

    def touches(self, dossier_id: str) -> bool:
        """Return whether dossier_id is either side of this transfer."""
        return dossier_id in (self.source_dossier_id, self.target_dossier_id)

    def is_incoming_for(self, dossier_id: str) -> bool:
        """Return whether dossier_id is the destination of this transfer."""
        return self.target_dossier_id == dossier_id

    def is_outgoing_for(self, dossier_id: str) -> bool:
        """Return whether dossier_id is the origin of this transfer."""
        return self.source_dossier_id == dossier_id

    def counterpart(self, direction: TransferDirection) -> WorldRef | None:
        """Return the world on the other side for the given direction.

        Incoming transfers arrived from the source world; outgoing ones left
        for the target world. None when the world could not be resolved.
        """
        if direction == TransferDirection.INCOMING:
            return self.source_world
        return self.target_world
