"""TransferLedger: classify a dossier's completed cross-world transfers.

Two-step read-then-enrich pipeline:

1. Read completed transfers where the dossier is source or target, newest
   first.
2. Resolve the referenced worlds with one secondary lookup. A world that
   does not resolve leaves the display reference empty; the transfer still
   counts.

Records that break a transfer invariant (same source and target world,
completed without a timestamp) are skipped and logged. Store failures
propagate as RetrievalFailure so callers can tell "no history" from
"history unknown".
"""

from __future__ import annotations

import logging

from casehub.application.dtos.transfer import TransferFact, TransferView
from casehub.application.interfaces.store import (
    COLLECTION_DOSSIER_TRANSFERS,
    COLLECTION_WORLDS,
    IRecordStore,
    OrderBy,
    all_of,
    any_of,
    eq,
    one_of,
)
from casehub.application.services.row_mapping import transfer_from_row, world_from_row
from casehub.domain.entities.transfer import TransferEntity
from casehub.domain.enums import TransferDirection, TransferStatus
from casehub.domain.exceptions import InconsistentTransfer
from casehub.domain.value_objects.core import WorldRef

logger = logging.getLogger(__name__)


def order_transfers(transfers: list[TransferEntity]) -> list[TransferEntity]:
    """Sort newest first; equal timestamps are ordered by id ascending.

    Both passes are stable sorts, so the result does not depend on the order
    the store returned rows in.
    """
    by_id = sorted(transfers, key=lambda t: t.id)
    return sorted(by_id, key=lambda t: t.transferred_at, reverse=True)


def _fact(transfer: TransferEntity, direction: TransferDirection) -> TransferFact:
    return TransferFact(
        transfer_id=transfer.id,
        transfer_type=transfer.transfer_type,
        transferred_at=transfer.transferred_at,
        counterpart=transfer.counterpart(direction),
    )


def build_view(
    dossier_id: str, transfers: list[TransferEntity], skipped: int = 0
) -> TransferView:
    """Classify already-ordered completed transfers of one dossier.

    Each direction picks its own most recent record; a re-home transfer
    (same dossier id on both sides) counts as incoming and outgoing.
    """
    incoming = next((t for t in transfers if t.is_incoming_for(dossier_id)), None)
    outgoing = next((t for t in transfers if t.is_outgoing_for(dossier_id)), None)
    if incoming is None and outgoing is None:
        return TransferView.empty(dossier_id, skipped=skipped)
    return TransferView(
        dossier_id=dossier_id,
        is_incoming=incoming is not None,
        is_outgoing=outgoing is not None,
        most_recent_incoming=(
            _fact(incoming, TransferDirection.INCOMING) if incoming else None
        ),
        most_recent_outgoing=(
            _fact(outgoing, TransferDirection.OUTGOING) if outgoing else None
        ),
        skipped=skipped,
    )


class TransferLedger:
    """Reads and classifies transfer history per dossier.

    Stateless between calls; concurrent classify() calls for different
    dossiers share nothing but the store.
    """

    def __init__(self, store: IRecordStore, history_limit: int | None = None) -> None:
        self.store = store
        self.history_limit = history_limit

    async def classify(self, dossier_id: str) -> TransferView:
        """Return the directional provenance facts for dossier_id.

        Raises:
            RetrievalFailure: If either store query fails.
        """
        transfers, skipped = await self._load(dossier_id)
        return build_view(dossier_id, transfers, skipped=skipped)

    async def history(self, dossier_id: str) -> list[TransferEntity]:
        """Return the ordered, validated and enriched completed transfers."""
        transfers, _ = await self._load(dossier_id)
        return transfers

    async def _load(self, dossier_id: str) -> tuple[list[TransferEntity], int]:
        rows = await self.store.query(
            COLLECTION_DOSSIER_TRANSFERS,
            all_of(
                any_of(
                    eq("source_dossier_id", dossier_id),
                    eq("target_dossier_id", dossier_id),
                ),
                eq("transfer_status", TransferStatus.COMPLETED.value),
            ),
            order=(OrderBy("transferred_at", descending=True),),
            limit=self.history_limit,
        )

        transfers: list[TransferEntity] = []
        skipped = 0
        for row in rows:
            # Only completed rows can be skipped as inconsistent.
            if row.get("transfer_status") != TransferStatus.COMPLETED.value:
                continue
            try:
                transfer = transfer_from_row(row)
            except InconsistentTransfer as e:
                skipped += 1
                logger.warning(
                    "Skipping transfer for dossier %s: %s", dossier_id, e.message
                )
                continue
            if not transfer.is_completed or not transfer.touches(dossier_id):
                continue
            transfers.append(transfer)

        if not transfers:
            return [], skipped

        await self._resolve_worlds(transfers)
        return order_transfers(transfers), skipped

    async def _resolve_worlds(self, transfers: list[TransferEntity]) -> None:
        """Attach {id, code, name} world references in one secondary lookup."""
        world_ids = sorted(
            {t.source_world_id for t in transfers} | {t.target_world_id for t in transfers}
        )
        rows = await self.store.query(COLLECTION_WORLDS, one_of("id", world_ids))
        refs: dict[str, WorldRef] = {}
        for row in rows:
            world = world_from_row(row)
            refs[world.id] = world.ref()

        for transfer in transfers:
            transfer.source_world = refs.get(transfer.source_world_id)
            transfer.target_world = refs.get(transfer.target_world_id)
            for side, world_id in (
                ("source", transfer.source_world_id),
                ("target", transfer.target_world_id),
            ):
                if world_id not in refs:
                    logger.warning(
                        "Transfer %s references unknown %s world %s; display fields omitted",
                        transfer.id,
                        side,
                        world_id,
                    )
