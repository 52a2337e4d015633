"""Application lifespan: startup and shutdown.

Wires the record store backend and the session registry onto app.state;
disposes the SQL engine on shutdown. No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from casehub.application.interfaces.store import IRecordStore
from casehub.core.config import Settings, get_settings
from casehub.core.session_registry import SessionRegistry
from casehub.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


def build_record_store(settings: Settings) -> IRecordStore:
    """Return the record store for the configured backend."""
    if settings.database_backend == "postgres":
        from casehub.infrastructure.persistence.database import get_session_factory
        from casehub.infrastructure.persistence.record_store import SqlRecordStore

        return SqlRecordStore(
            get_session_factory(),
            timeout_seconds=settings.store_query_timeout_seconds,
        )

    from casehub.infrastructure.memory.record_store import InMemoryRecordStore

    if settings.memory_seed_path:
        return InMemoryRecordStore.from_json_file(settings.memory_seed_path)
    logger.warning("Memory backend without MEMORY_SEED_PATH: store starts empty")
    return InMemoryRecordStore()


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    A record store already set on app.state (tests) is kept.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    if getattr(app.state, "record_store", None) is None:
        app.state.record_store = build_record_store(settings)
    if getattr(app.state, "session_registry", None) is None:
        app.state.session_registry = SessionRegistry()
    logger.info("Record store backend: %s", settings.database_backend)

    yield

    # ---- Shutdown ----
    if settings.database_backend == "postgres":
        from casehub.infrastructure.persistence.database import dispose_engine

        await dispose_engine()
