"""SQL-backed record store (implements IRecordStore).

Compiles the generic filter tree to SQLAlchemy Core over the ORM tables and
returns rows as plain dicts. Every failure (unknown collection or field,
driver error, timeout) surfaces as RetrievalFailure.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select, Table, and_, false, or_, select, true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql.elements import ColumnElement

from casehub.application.interfaces.store import (
    COLLECTION_DOSSIER_TRANSFERS,
    COLLECTION_DOSSIERS,
    COLLECTION_PROFILES,
    COLLECTION_ROLES,
    COLLECTION_USER_ROLES,
    COLLECTION_USER_WORLD_ACCESS,
    COLLECTION_WORLDS,
    AllOf,
    AnyOf,
    FieldEquals,
    OrderBy,
    Predicate,
)
from casehub.domain.exceptions import RetrievalFailure
from casehub.infrastructure.persistence.models import (
    Dossier,
    DossierTransfer,
    Profile,
    Role,
    UserRole,
    UserWorldAccess,
    World,
)

logger = logging.getLogger(__name__)

TABLES: dict[str, Table] = {
    COLLECTION_WORLDS: World.__table__,
    COLLECTION_PROFILES: Profile.__table__,
    COLLECTION_ROLES: Role.__table__,
    COLLECTION_USER_ROLES: UserRole.__table__,
    COLLECTION_USER_WORLD_ACCESS: UserWorldAccess.__table__,
    COLLECTION_DOSSIERS: Dossier.__table__,
    COLLECTION_DOSSIER_TRANSFERS: DossierTransfer.__table__,
}


def _table(collection: str) -> Table:
    try:
        return TABLES[collection]
    except KeyError:
        raise RetrievalFailure(collection, "unknown collection") from None


def _column(table: Table, field: str) -> ColumnElement[Any]:
    if field not in table.c:
        raise RetrievalFailure(table.name, f"unknown field {field!r}")
    return table.c[field]


def build_clause(table: Table, predicate: Predicate) -> ColumnElement[bool]:
    """Compile a predicate tree into a SQL boolean expression."""
    if isinstance(predicate, FieldEquals):
        column = _column(table, predicate.field)
        if predicate.value is None:
            return column.is_(None)
        return column == predicate.value
    if isinstance(predicate, AnyOf):
        if not predicate.predicates:
            return false()
        return or_(*(build_clause(table, p) for p in predicate.predicates))
    if isinstance(predicate, AllOf):
        if not predicate.predicates:
            return true()
        return and_(*(build_clause(table, p) for p in predicate.predicates))
    raise RetrievalFailure(table.name, f"unsupported predicate {type(predicate).__name__}")


def build_select(
    collection: str,
    filter: Predicate | None = None,
    order: Sequence[OrderBy] = (),
    limit: int | None = None,
) -> Select:
    """Build the SELECT for a query() call."""
    table = _table(collection)
    stmt = select(table)
    if filter is not None:
        stmt = stmt.where(build_clause(table, filter))
    for key in order:
        column = _column(table, key.field)
        stmt = stmt.order_by(
            column.desc().nulls_last() if key.descending else column.asc().nulls_last()
        )
    if limit is not None:
        stmt = stmt.limit(limit)
    return stmt


class SqlRecordStore:
    """Record store over an async SQLAlchemy session factory."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        timeout_seconds: float = 10.0,
    ) -> None:
        self.session_factory = session_factory
        self.timeout_seconds = timeout_seconds

    async def query(
        self,
        collection: str,
        filter: Predicate | None = None,
        order: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        stmt = build_select(collection, filter, order, limit)
        try:
            return await asyncio.wait_for(self._execute(stmt), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as e:
            logger.error(
                "Query on %s timed out after %.1fs", collection, self.timeout_seconds
            )
            raise RetrievalFailure(collection, "timeout") from e
        except (SQLAlchemyError, OSError) as e:
            logger.error("Query on %s failed: %s", collection, e)
            raise RetrievalFailure(collection, type(e).__name__) from e

    async def _execute(self, stmt: Select) -> list[dict[str, Any]]:
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [dict(row) for row in result.mappings().all()]
