"""DTOs for session and access state (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime

from casehub.domain.entities.world import WorldEntity
from casehub.domain.enums import Role


@dataclass(frozen=True)
class ProfileResult:
    """Profile read-model for the authenticated user."""

    id: str
    email: str
    display_name: str | None = None


@dataclass(frozen=True)
class SessionInfo:
    """Authenticated session derived from a verified bearer token."""

    session_id: str
    user_id: str
    expires_at: datetime | None = None


@dataclass(frozen=True)
class AccessSnapshot:
    """Immutable view of everything AccessControl knows about the principal.

    The default instance is the logged-out state.
    """

    user_id: str | None = None
    session: SessionInfo | None = None
    profile: ProfileResult | None = None
    roles: frozenset[Role] = field(default_factory=frozenset)
    accessible_worlds: tuple[WorldEntity, ...] = ()
    current_world: WorldEntity | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None
