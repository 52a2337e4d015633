"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from casehub.domain.entities import TransferEntity, WorldEntity
from casehub.domain.enums import Role, TransferDirection, TransferStatus
from casehub.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    CasehubException,
    InconsistentTransfer,
    InvalidTransferTransition,
    ResourceNotFoundException,
    RetrievalFailure,
    ValidationException,
)
from casehub.domain.value_objects import ThemeColors, WorldCode, WorldRef

__all__ = [
    # Entities
    "TransferEntity",
    "WorldEntity",
    # Enums
    "Role",
    "TransferDirection",
    "TransferStatus",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "CasehubException",
    "InconsistentTransfer",
    "InvalidTransferTransition",
    "ResourceNotFoundException",
    "RetrievalFailure",
    "ValidationException",
    # Value objects
    "ThemeColors",
    "WorldCode",
    "WorldRef",
]
