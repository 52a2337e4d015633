"""SqlRecordStore integration tests. Require Postgres (DATABASE_BACKEND=postgres).

Tables are created before each test and dropped afterwards.
"""

from datetime import UTC, datetime

import pytest

from casehub.application.interfaces.store import OrderBy, all_of, any_of, eq, one_of
from casehub.application.services.transfer_ledger import TransferLedger
from casehub.core.config import get_settings
from casehub.domain.exceptions import RetrievalFailure
from casehub.infrastructure.persistence.database import Base
from casehub.infrastructure.persistence.models import Dossier, DossierTransfer, World
from casehub.infrastructure.persistence.record_store import SqlRecordStore


@pytest.fixture
async def sql_store():
    settings = get_settings()
    if settings.database_backend != "postgres":
        pytest.skip("Postgres not configured (DATABASE_BACKEND=postgres)")
    from casehub.infrastructure.persistence import database

    factory = database.get_session_factory()
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    async with factory() as session:
        session.add_all(
            [
                World(id="w-jde", code="JDE", name="JDE"),
                World(id="w-jdmo", code="JDMO", name="JDMO"),
            ]
        )
        await session.flush()
        session.add_all(
            [
                Dossier(id="d-0", world_id="w-jde", title="Origin"),
                Dossier(id="d-1", world_id="w-jdmo", title="Copy"),
            ]
        )
        await session.flush()
        session.add_all(
            [
                DossierTransfer(
                    id="tr-1",
                    transfer_type="reassignment",
                    transfer_status="completed",
                    transferred_at=datetime(2025, 3, 1, 8, tzinfo=UTC),
                    source_dossier_id="d-0",
                    target_dossier_id="d-1",
                    source_world_id="w-jde",
                    target_world_id="w-jdmo",
                ),
                DossierTransfer(
                    id="tr-2",
                    transfer_type="reassignment",
                    transfer_status="scheduled",
                    source_dossier_id="d-1",
                    target_dossier_id="d-0",
                    source_world_id="w-jdmo",
                    target_world_id="w-jde",
                ),
            ]
        )
        await session.commit()
    yield SqlRecordStore(factory, timeout_seconds=settings.store_query_timeout_seconds)
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await database.dispose_engine()


@pytest.mark.requires_db
async def test_filter_order_and_limit(sql_store) -> None:
    rows = await sql_store.query(
        "dossier_transfers",
        any_of(eq("source_dossier_id", "d-1"), eq("target_dossier_id", "d-1")),
        order=(OrderBy("transferred_at", descending=True),),
    )
    assert [r["id"] for r in rows] == ["tr-1", "tr-2"]

    rows = await sql_store.query("worlds", one_of("id", ["w-jdmo"]), limit=1)
    assert rows[0]["code"] == "JDMO"


@pytest.mark.requires_db
async def test_unknown_field_is_retrieval_failure(sql_store) -> None:
    with pytest.raises(RetrievalFailure):
        await sql_store.query("worlds", all_of(eq("colour", "blue")))


@pytest.mark.requires_db
async def test_ledger_over_sql(sql_store) -> None:
    view = await TransferLedger(sql_store).classify("d-1")
    assert view.is_incoming
    assert not view.is_outgoing
    assert view.most_recent_incoming.counterpart.code == "JDE"
