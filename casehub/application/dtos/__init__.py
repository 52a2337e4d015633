"""Application DTOs (frozen dataclasses, no ORM)."""

from casehub.application.dtos.access import AccessSnapshot, ProfileResult, SessionInfo
from casehub.application.dtos.dossier import DossierResult
from casehub.application.dtos.transfer import TransferFact, TransferView

__all__ = [
    "AccessSnapshot",
    "DossierResult",
    "ProfileResult",
    "SessionInfo",
    "TransferFact",
    "TransferView",
]
