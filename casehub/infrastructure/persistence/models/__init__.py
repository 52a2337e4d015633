"""ORM models for the tables the core reads."""

from casehub.infrastructure.persistence.models.access import (
    Profile,
    Role,
    UserRole,
    UserWorldAccess,
)
from casehub.infrastructure.persistence.models.dossier import Dossier, DossierTransfer
from casehub.infrastructure.persistence.models.world import World

__all__ = [
    "Dossier",
    "DossierTransfer",
    "Profile",
    "Role",
    "UserRole",
    "UserWorldAccess",
    "World",
]
