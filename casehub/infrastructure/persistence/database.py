"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Only used when database_backend is 'postgres'. The tables are described by
the ORM models and created by the Alembic migrations in ./migrations.

The engine is built lazily on first use, so importing this module never
triggers Settings validation.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from casehub.core.config import Settings, get_settings
from casehub.domain.exceptions import SqlNotConfiguredException

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 10
DEFAULT_MAX_OVERFLOW = 20
DEFAULT_COMMAND_TIMEOUT = 60

engine: AsyncEngine | None = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def _engine_options(settings: Settings) -> dict[str, Any]:
    """Pool and driver options; unset overrides fall back to the defaults above."""
    options: dict[str, Any] = {
        "echo": settings.database_echo,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "pool_size": settings.db_pool_size or DEFAULT_POOL_SIZE,
        "max_overflow": settings.db_max_overflow or DEFAULT_MAX_OVERFLOW,
    }
    if settings.database_url.startswith("postgresql"):
        options["connect_args"] = {
            "command_timeout": settings.db_command_timeout or DEFAULT_COMMAND_TIMEOUT,
            "server_settings": {"application_name": settings.app_name},
        }
    return options


def _ensure_engine() -> None:
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    if settings.database_backend != "postgres":
        return
    engine = create_async_engine(settings.database_url, **_engine_options(settings))
    AsyncSessionLocal = async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    logger.info("SQL engine created for record store")


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the session factory, creating the engine if needed.

    Raises:
        SqlNotConfiguredException: When database_backend is not 'postgres'.
    """
    _ensure_engine()
    if AsyncSessionLocal is None:
        logger.error(
            "SQL record store not configured: set DATABASE_BACKEND=postgres and "
            "DATABASE_URL (postgresql+asyncpg://...), then run: alembic upgrade head"
        )
        raise SqlNotConfiguredException()
    return AsyncSessionLocal


async def dispose_engine() -> None:
    """Dispose the engine on shutdown (no-op when never created)."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
        logger.info("SQL engine disposed")
    engine = None
    AsyncSessionLocal = None


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""
