"""Record store interface (port) for the application layer.

The core reads everything it needs through one generic query call against
an external store. Filters are small immutable trees so that each backend
(SQL, in-memory) can compile them its own way.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, Union

# Collection names (schema-in-code; aligned with SQL table names).
COLLECTION_WORLDS = "worlds"
COLLECTION_PROFILES = "profiles"
COLLECTION_ROLES = "roles"
COLLECTION_USER_ROLES = "user_roles"
COLLECTION_USER_WORLD_ACCESS = "user_world_access"
COLLECTION_DOSSIERS = "dossiers"
COLLECTION_DOSSIER_TRANSFERS = "dossier_transfers"

COLLECTIONS = (
    COLLECTION_WORLDS,
    COLLECTION_PROFILES,
    COLLECTION_ROLES,
    COLLECTION_USER_ROLES,
    COLLECTION_USER_WORLD_ACCESS,
    COLLECTION_DOSSIERS,
    COLLECTION_DOSSIER_TRANSFERS,
)


@dataclass(frozen=True)
class FieldEquals:
    """Predicate: row[field] == value."""

    field: str
    value: Any


@dataclass(frozen=True)
class AnyOf:
    """Predicate: logical OR of its children. Empty AnyOf matches nothing."""

    predicates: tuple[Predicate, ...]


@dataclass(frozen=True)
class AllOf:
    """Predicate: logical AND of its children. Empty AllOf matches everything."""

    predicates: tuple[Predicate, ...]


Predicate = Union[FieldEquals, AnyOf, AllOf]


@dataclass(frozen=True)
class OrderBy:
    """Sort key for a query."""

    field: str
    descending: bool = False


def eq(field: str, value: Any) -> FieldEquals:
    return FieldEquals(field, value)


def any_of(*predicates: Predicate) -> AnyOf:
    return AnyOf(tuple(predicates))


def all_of(*predicates: Predicate) -> AllOf:
    return AllOf(tuple(predicates))


def one_of(field: str, values: Sequence[Any]) -> AnyOf:
    """OR of equality predicates on one field (e.g. id in a set of ids)."""
    return AnyOf(tuple(FieldEquals(field, v) for v in values))


def referenced_fields(predicate: Predicate | None) -> set[str]:
    """Return every field name a predicate tree refers to."""
    if predicate is None:
        return set()
    if isinstance(predicate, FieldEquals):
        return {predicate.field}
    fields: set[str] = set()
    for child in predicate.predicates:
        fields |= referenced_fields(child)
    return fields


class IRecordStore(Protocol):
    """Protocol for the external record store (DIP)."""

    async def query(
        self,
        collection: str,
        filter: Predicate | None = None,
        order: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return matching rows as plain dicts.

        Raises:
            RetrievalFailure: If the query did not complete (unreachable
                store, timeout, unknown collection or field, bad response).
        """
        ...
