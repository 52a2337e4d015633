"""AccessControl: role and world-scoped authorization state for one session.

Holds an immutable AccessSnapshot and swaps it on every mutation, so any
reader sees either the state before or after a change, never a mix of
fields. Authorization is data-driven, not hierarchical: the superadmin flag
is checked on its own and never implies membership of a world.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import replace

from casehub.application.dtos.access import AccessSnapshot, ProfileResult, SessionInfo
from casehub.domain.entities.world import WorldEntity
from casehub.domain.enums import Role


def _unique_worlds(worlds: Iterable[WorldEntity]) -> tuple[WorldEntity, ...]:
    """Drop worlds whose id was already seen (first occurrence wins)."""
    seen: set[str] = set()
    result: list[WorldEntity] = []
    for world in worlds:
        if world.id in seen:
            continue
        seen.add(world.id)
        result.append(world)
    return tuple(result)


class AccessControl:
    """Single-writer state container with derived authorization predicates.

    Mutators are total and do not validate their input; data is validated
    where it enters the core (SessionLoader). No method performs I/O.
    """

    def __init__(self, snapshot: AccessSnapshot | None = None) -> None:
        self._lock = threading.Lock()
        self._snapshot = snapshot or AccessSnapshot()

    def snapshot(self) -> AccessSnapshot:
        """Return the current immutable snapshot."""
        return self._snapshot

    # ---- Predicates ----

    def is_super_admin(self) -> bool:
        """Return True iff the principal holds the superadmin role."""
        return Role.SUPERADMIN in self._snapshot.roles

    def has_role(self, role: Role) -> bool:
        """Return True iff the principal holds this exact role. No role implies another."""
        return role in self._snapshot.roles

    def has_world_access(self, world_code: str) -> bool:
        """Return True iff an accessible world has exactly this code.

        Matching is case-sensitive. Unknown and empty codes return False.
        """
        if not world_code:
            return False
        return any(w.has_code(world_code) for w in self._snapshot.accessible_worlds)

    def accessible_world_codes(self) -> list[str]:
        """Return the codes of the accessible worlds, in load order."""
        return [w.code.value for w in self._snapshot.accessible_worlds]

    def find_accessible_world(self, world_code: str) -> WorldEntity | None:
        """Return the accessible world with this code, or None."""
        for world in self._snapshot.accessible_worlds:
            if world.has_code(world_code):
                return world
        return None

    # ---- Mutators (atomic replace) ----

    def load(self, snapshot: AccessSnapshot) -> None:
        """Replace every field at once (session start or refresh)."""
        snapshot = replace(
            snapshot, accessible_worlds=_unique_worlds(snapshot.accessible_worlds)
        )
        with self._lock:
            self._snapshot = snapshot

    def set_user(self, user_id: str | None) -> None:
        with self._lock:
            self._snapshot = replace(self._snapshot, user_id=user_id)

    def set_session(self, session: SessionInfo | None) -> None:
        with self._lock:
            self._snapshot = replace(self._snapshot, session=session)

    def set_profile(self, profile: ProfileResult | None) -> None:
        with self._lock:
            self._snapshot = replace(self._snapshot, profile=profile)

    def set_roles(self, roles: Iterable[Role]) -> None:
        roles = frozenset(roles)
        with self._lock:
            self._snapshot = replace(self._snapshot, roles=roles)

    def set_accessible_worlds(self, worlds: Iterable[WorldEntity]) -> None:
        worlds = _unique_worlds(worlds)
        with self._lock:
            self._snapshot = replace(self._snapshot, accessible_worlds=worlds)

    def set_current_world(self, world: WorldEntity | None) -> None:
        with self._lock:
            self._snapshot = replace(self._snapshot, current_world=world)

    def logout(self) -> None:
        """Reset user, session, profile, roles, worlds and current world in one step."""
        with self._lock:
            self._snapshot = AccessSnapshot()
