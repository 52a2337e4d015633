"""In-memory infrastructure (record store for the memory backend and tests)."""

from casehub.infrastructure.memory.record_store import InMemoryRecordStore

__all__ = ["InMemoryRecordStore"]
