"""DTOs for transfer classification (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from casehub.domain.value_objects.core import WorldRef


@dataclass(frozen=True)
class TransferFact:
    """One directional provenance fact: which world, when, and which transfer.

    counterpart is the source world for an incoming transfer and the target
    world for an outgoing one; None when that world could not be resolved.
    """

    transfer_id: str
    transfer_type: str
    transferred_at: datetime
    counterpart: WorldRef | None


@dataclass(frozen=True)
class TransferView:
    """Classified transfer history of one dossier.

    skipped counts completed records that were excluded as inconsistent.
    """

    dossier_id: str
    is_incoming: bool = False
    is_outgoing: bool = False
    most_recent_incoming: TransferFact | None = None
    most_recent_outgoing: TransferFact | None = None
    skipped: int = 0

    @classmethod
    def empty(cls, dossier_id: str, skipped: int = 0) -> "TransferView":
        return cls(dossier_id=dossier_id, skipped=skipped)

    @property
    def has_history(self) -> bool:
        return self.is_incoming or self.is_outgoing
