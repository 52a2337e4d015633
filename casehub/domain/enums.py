"""Domain enumerations for casehub.

Enums represent fixed sets of domain values (roles, transfer status).
"""

from enum import Enum


class Role(str, Enum):
    """Coarse privilege label held by a principal.

    Roles are orthogonal to world membership: holding SUPERADMIN does not
    grant access to any world by itself.
    """

    SUPERADMIN = "superadmin"
    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid role values as strings."""
        return [role.value for role in cls]

    @classmethod
    def parse(cls, value: str) -> "Role | None":
        """Return the Role for value, or None if value is not a known role."""
        try:
            return cls(value)
        except ValueError:
            return None


class TransferStatus(str, Enum):
    """Transfer lifecycle status.

    SCHEDULED moves to COMPLETED or CANCELLED; both are terminal.
    """

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings."""
        return [status.value for status in cls]

    @property
    def is_terminal(self) -> bool:
        return self in (TransferStatus.COMPLETED, TransferStatus.CANCELLED)


class TransferDirection(str, Enum):
    """Direction of a transfer relative to one dossier."""

    INCOMING = "incoming"
    OUTGOING = "outgoing"
