"""World directory: read-only lookups of worlds for administration surfaces."""

from __future__ import annotations

from casehub.application.interfaces.store import (
    COLLECTION_WORLDS,
    IRecordStore,
    OrderBy,
    eq,
)
from casehub.application.services.row_mapping import world_from_row
from casehub.domain.entities.world import WorldEntity


class WorldDirectory:
    """Lists worlds from the record store. Worlds are never mutated here."""

    def __init__(self, store: IRecordStore) -> None:
        self.store = store

    async def list_worlds(self) -> list[WorldEntity]:
        """Return every world, ordered by code."""
        rows = await self.store.query(COLLECTION_WORLDS, order=(OrderBy("code"),))
        return [world_from_row(row) for row in rows]

    async def get_by_code(self, code: str) -> WorldEntity | None:
        rows = await self.store.query(COLLECTION_WORLDS, eq("code", code), limit=1)
        return world_from_row(rows[0]) if rows else None
