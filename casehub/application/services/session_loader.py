"""Session loader: populate AccessControl from the record store.

Runs at session start and on refresh. Roles are parsed into the closed Role
enumeration here, at the boundary; unknown role names are dropped and logged
so stringly-typed roles never reach AccessControl.
"""

from __future__ import annotations

import logging

from casehub.application.dtos.access import AccessSnapshot, ProfileResult, SessionInfo
from casehub.application.interfaces.store import (
    COLLECTION_PROFILES,
    COLLECTION_ROLES,
    COLLECTION_USER_ROLES,
    COLLECTION_USER_WORLD_ACCESS,
    COLLECTION_WORLDS,
    IRecordStore,
    OrderBy,
    eq,
    one_of,
)
from casehub.application.services.access_control import AccessControl
from casehub.application.services.row_mapping import profile_from_row, world_from_row
from casehub.domain.entities.world import WorldEntity
from casehub.domain.enums import Role

logger = logging.getLogger(__name__)


class SessionLoader:
    """Reads profile, role assignments and world grants for one user."""

    def __init__(self, store: IRecordStore) -> None:
        self.store = store

    async def load(self, access_control: AccessControl, session: SessionInfo) -> AccessSnapshot:
        """Fetch the principal's data and load it into access_control in one step.

        The current world is kept when it is still accessible after the
        reload. On RetrievalFailure the access control is left unchanged.

        Returns:
            The snapshot that was loaded.
        """
        user_id = session.user_id
        profile = await self.get_profile(user_id)
        roles = await self.get_roles(user_id)
        worlds = await self.get_accessible_worlds(user_id)

        current = access_control.snapshot().current_world
        if current is not None and not any(w.id == current.id for w in worlds):
            current = None

        snapshot = AccessSnapshot(
            user_id=user_id,
            session=session,
            profile=profile,
            roles=roles,
            accessible_worlds=tuple(worlds),
            current_world=current,
        )
        access_control.load(snapshot)
        logger.debug(
            "Loaded session %s: roles=%s worlds=%s",
            session.session_id,
            sorted(r.value for r in roles),
            [w.code.value for w in worlds],
        )
        return access_control.snapshot()

    async def get_profile(self, user_id: str) -> ProfileResult | None:
        rows = await self.store.query(COLLECTION_PROFILES, eq("id", user_id), limit=1)
        return profile_from_row(rows[0]) if rows else None

    async def get_roles(self, user_id: str) -> frozenset[Role]:
        """Return the user's roles; unknown role names are dropped with a warning."""
        assignments = await self.store.query(
            COLLECTION_USER_ROLES, eq("user_id", user_id)
        )
        role_ids = sorted({row["role_id"] for row in assignments if row.get("role_id")})
        if not role_ids:
            return frozenset()
        role_rows = await self.store.query(COLLECTION_ROLES, one_of("id", role_ids))
        roles: set[Role] = set()
        for row in role_rows:
            role = Role.parse(str(row.get("name")))
            if role is None:
                logger.warning(
                    "Dropping unknown role %r assigned to user %s", row.get("name"), user_id
                )
                continue
            roles.add(role)
        return frozenset(roles)

    async def get_accessible_worlds(self, user_id: str) -> list[WorldEntity]:
        """Return the worlds granted to the user, ordered by code."""
        grants = await self.store.query(
            COLLECTION_USER_WORLD_ACCESS, eq("user_id", user_id)
        )
        world_ids = sorted({row["world_id"] for row in grants if row.get("world_id")})
        if not world_ids:
            return []
        rows = await self.store.query(
            COLLECTION_WORLDS,
            one_of("id", world_ids),
            order=(OrderBy("code"),),
        )
        return [world_from_row(row) for row in rows]
