"""In-memory record store (implements IRecordStore).

Evaluates the same filter trees as the SQL store over lists of dicts. Backs
the "memory" database backend (optionally seeded from a JSON file) and the
test suite.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from casehub.application.interfaces.store import (
    COLLECTIONS,
    AllOf,
    AnyOf,
    FieldEquals,
    OrderBy,
    Predicate,
    referenced_fields,
)
from casehub.domain.exceptions import RetrievalFailure
from casehub.shared.utils.datetime import parse_utc

logger = logging.getLogger(__name__)


def matches(predicate: Predicate | None, row: dict[str, Any]) -> bool:
    """Return whether row satisfies predicate (None matches everything)."""
    if predicate is None:
        return True
    if isinstance(predicate, FieldEquals):
        return row.get(predicate.field) == predicate.value
    if isinstance(predicate, AnyOf):
        return any(matches(p, row) for p in predicate.predicates)
    if isinstance(predicate, AllOf):
        return all(matches(p, row) for p in predicate.predicates)
    raise TypeError(f"Unsupported predicate: {type(predicate).__name__}")


def _sort_value(value: Any) -> Any:
    """Normalize ISO timestamps so string and datetime values compare."""
    if isinstance(value, str):
        try:
            return parse_utc(value)
        except ValueError:
            return value
    return value


def _apply_order(rows: list[dict[str, Any]], order: Sequence[OrderBy]) -> list[dict[str, Any]]:
    # Least significant key first; stable sorts keep earlier keys intact. None sorts last.
    for key in reversed(order):
        present = [r for r in rows if r.get(key.field) is not None]
        missing = [r for r in rows if r.get(key.field) is None]
        present.sort(key=lambda r: _sort_value(r[key.field]), reverse=key.descending)
        rows = present + missing
    return rows


class InMemoryRecordStore:
    """Collections of dict rows keyed by collection name.

    Every known collection exists (possibly empty); other names are unknown.
    """

    def __init__(self, collections: dict[str, Iterable[dict[str, Any]]] | None = None) -> None:
        self._collections: dict[str, list[dict[str, Any]]] = {name: [] for name in COLLECTIONS}
        for name, rows in (collections or {}).items():
            self._collections[name] = [dict(row) for row in rows]

    @classmethod
    def from_json_file(cls, path: str | Path) -> InMemoryRecordStore:
        """Load collections from a JSON object of {collection: [rows]}."""
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Seed file {path} must contain a JSON object")
        logger.info("Loaded memory store seed from %s (%d collections)", path, len(data))
        return cls(data)

    def add(self, collection: str, *rows: dict[str, Any]) -> None:
        self._collections.setdefault(collection, []).extend(dict(r) for r in rows)

    def update(self, collection: str, row_id: str, **changes: Any) -> None:
        """Apply changes to the row with this id (tests and seed tooling)."""
        for row in self._collections.get(collection, []):
            if row.get("id") == row_id:
                row.update(changes)
                return
        raise KeyError(f"{collection}/{row_id}")

    async def query(
        self,
        collection: str,
        filter: Predicate | None = None,
        order: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        if collection not in self._collections:
            raise RetrievalFailure(collection, "unknown collection")
        rows = self._collections[collection]
        known = set().union(*(r.keys() for r in rows)) if rows else set()
        wanted = referenced_fields(filter) | {o.field for o in order}
        unknown = wanted - known
        if rows and unknown:
            raise RetrievalFailure(collection, f"unknown field {sorted(unknown)[0]!r}")
        result = [copy.deepcopy(r) for r in rows if matches(filter, r)]
        try:
            result = _apply_order(result, order)
        except TypeError as e:
            raise RetrievalFailure(collection, f"unorderable values: {e}") from e
        if limit is not None:
            result = result[:limit]
        return result
