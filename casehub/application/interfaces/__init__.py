"""Application ports: protocols implemented by infrastructure."""

from casehub.application.interfaces.store import (
    AllOf,
    AnyOf,
    FieldEquals,
    IRecordStore,
    OrderBy,
    Predicate,
    all_of,
    any_of,
    eq,
    one_of,
)

__all__ = [
    "AllOf",
    "AnyOf",
    "FieldEquals",
    "IRecordStore",
    "OrderBy",
    "Predicate",
    "all_of",
    "any_of",
    "eq",
    "one_of",
]
