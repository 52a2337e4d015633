"""Dossier directory: resolve a dossier within the world that owns it.

Every world-scoped dossier read goes through find_in_world first, so a
dossier is only visible through the world it belongs to.
"""

from __future__ import annotations

import logging

from casehub.application.dtos.dossier import DossierResult
from casehub.application.interfaces.store import COLLECTION_DOSSIERS, IRecordStore, eq
from casehub.application.services.row_mapping import dossier_from_row

logger = logging.getLogger(__name__)


class DossierDirectory:
    """Read-only dossier lookups against the record store."""

    def __init__(self, store: IRecordStore) -> None:
        self.store = store

    async def get(self, dossier_id: str) -> DossierResult | None:
        rows = await self.store.query(COLLECTION_DOSSIERS, eq("id", dossier_id), limit=1)
        return dossier_from_row(rows[0]) if rows else None

    async def find_in_world(self, dossier_id: str, world_id: str) -> DossierResult | None:
        """Return the dossier when it exists and belongs to world_id, else None.

        Raises:
            RetrievalFailure: If the store query fails.
        """
        dossier = await self.get(dossier_id)
        if dossier is None:
            return None
        if dossier.world_id != world_id:
            logger.info(
                "Dossier %s requested through world %s but belongs to %s",
                dossier_id,
                world_id,
                dossier.world_id,
            )
            return None
        return dossier
