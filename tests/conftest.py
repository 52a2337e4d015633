"""Pytest configuration and fixtures for casehub.

Env defaults are set before importing the app so Settings validate with the
memory backend. HTTP tests run against casehub.main:app with an in-memory
record store seeded per test.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-casehub")
os.environ.setdefault("DATABASE_BACKEND", "memory")

import time
from collections.abc import Callable
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt

from casehub.core.config import get_settings
from casehub.core.session_registry import SessionRegistry
from casehub.infrastructure.memory.record_store import InMemoryRecordStore
from casehub.main import app

THEME = {"primary": "#1d4ed8", "accent": "#f59e0b", "neutral": "220 14% 96%"}


def _transfer(
    id: str,
    source_dossier_id: str,
    target_dossier_id: str,
    source_world_id: str,
    target_world_id: str,
    transferred_at: str | None,
    status: str = "completed",
    transfer_type: str = "reassignment",
) -> dict[str, Any]:
    return {
        "id": id,
        "transfer_type": transfer_type,
        "transfer_status": status,
        "transferred_at": transferred_at,
        "source_dossier_id": source_dossier_id,
        "target_dossier_id": target_dossier_id,
        "source_world_id": source_world_id,
        "target_world_id": target_world_id,
    }


def _dossier(id: str, world_id: str) -> dict[str, Any]:
    return {"id": id, "world_id": world_id, "title": f"Dossier {id}", "status": "nouveau"}


def seed_collections() -> dict[str, list[dict[str, Any]]]:
    """Three worlds, three users and transfer histories covering each classification case."""
    return {
        "worlds": [
            {"id": "w-jde", "code": "JDE", "name": "Justice de Eaux", "description": None, "theme_colors": THEME},
            {"id": "w-jdmo", "code": "JDMO", "name": "Justice des Mots", "description": "Second line", "theme_colors": THEME},
            {"id": "w-dbcs", "code": "DBCS", "name": "DB Conseil", "description": None, "theme_colors": {"primary": "not-a-color"}},
        ],
        "profiles": [
            {"id": "u-editor", "email": "editor@example.com", "display_name": "Eddie"},
            {"id": "u-super", "email": "super@example.com", "display_name": None},
            {"id": "u-mixed", "email": "mixed@example.com", "display_name": "Mix"},
        ],
        "roles": [
            {"id": "r-super", "name": "superadmin", "label": "Super admin"},
            {"id": "r-admin", "name": "admin", "label": "Admin"},
            {"id": "r-editor", "name": "editor", "label": "Editor"},
            {"id": "r-viewer", "name": "viewer", "label": "Viewer"},
            {"id": "r-auditor", "name": "auditor", "label": "Auditor"},
        ],
        "user_roles": [
            {"id": "ur-1", "user_id": "u-editor", "role_id": "r-editor"},
            {"id": "ur-2", "user_id": "u-super", "role_id": "r-super"},
            {"id": "ur-3", "user_id": "u-super", "role_id": "r-editor"},
            {"id": "ur-4", "user_id": "u-mixed", "role_id": "r-viewer"},
            {"id": "ur-5", "user_id": "u-mixed", "role_id": "r-auditor"},
        ],
        "user_world_access": [
            {"id": "uwa-1", "user_id": "u-editor", "world_id": "w-jde"},
            {"id": "uwa-2", "user_id": "u-super", "world_id": "w-dbcs"},
            {"id": "uwa-3", "user_id": "u-mixed", "world_id": "w-jdmo"},
            {"id": "uwa-4", "user_id": "u-mixed", "world_id": "w-jde"},
            {"id": "uwa-5", "user_id": "u-mixed", "world_id": "w-jde"},
        ],
        "dossiers": [
            _dossier("d-a0", "w-jde"),
            _dossier("d-a", "w-jdmo"),
            _dossier("d-b0", "w-jde"),
            _dossier("d-b", "w-jdmo"),
            _dossier("d-b2", "w-dbcs"),
            _dossier("d-d0", "w-jdmo"),
            _dossier("d-d", "w-jde"),
            _dossier("d-d1", "w-dbcs"),
            _dossier("d-e", "w-jde"),
            _dossier("d-e0", "w-dbcs"),
            _dossier("d-e1", "w-jdmo"),
        ],
        "dossier_transfers": [
            # Arrived in JDMO from JDE.
            _transfer("tr-a", "d-a0", "d-a", "w-jde", "w-jdmo", "2025-03-01T08:00:00Z"),
            # Left for DBCS at 10:00 after arriving from JDE at 09:00.
            _transfer("tr-b-out", "d-b", "d-b2", "w-jdmo", "w-dbcs", "2025-03-02T10:00:00Z"),
            _transfer("tr-b-in", "d-b0", "d-b", "w-jde", "w-jdmo", "2025-03-02T09:00:00Z"),
            # Completed from JDMO, scheduled from DBCS.
            _transfer("tr-d-done", "d-d0", "d-d", "w-jdmo", "w-jde", "2025-03-03T08:00:00Z"),
            _transfer("tr-d-sched", "d-d1", "d-d", "w-dbcs", "w-jde", None, status="scheduled"),
            # Only voided or pending history.
            _transfer("tr-e-sched", "d-e", "d-e1", "w-jde", "w-jdmo", None, status="scheduled"),
            _transfer("tr-e-cancel", "d-e0", "d-e", "w-dbcs", "w-jde", None, status="cancelled"),
        ],
    }


@pytest.fixture
def seed() -> dict[str, list[dict[str, Any]]]:
    return seed_collections()


@pytest.fixture
def store(seed) -> InMemoryRecordStore:
    return InMemoryRecordStore(seed)


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Build a bearer token the way the external auth provider would."""

    def _make(
        user_id: str,
        session_id: str | None = None,
        expires_in: int = 3600,
    ) -> str:
        settings = get_settings()
        claims: dict[str, Any] = {"sub": user_id, "exp": int(time.time()) + expires_in}
        if session_id:
            claims["session_id"] = session_id
        return jwt.encode(
            claims, settings.secret_key.get_secret_value(), algorithm=settings.algorithm
        )

    return _make


@pytest.fixture
def auth_headers(make_token) -> Callable[..., dict[str, str]]:
    def _headers(user_id: str, session_id: str | None = None) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(user_id, session_id)}"}

    return _headers


@pytest.fixture
async def client(store) -> AsyncClient:
    """Async HTTP client against the FastAPI app with a fresh store and registry."""
    app.state.record_store = store
    app.state.session_registry = SessionRegistry()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.state.record_store = None
    app.state.session_registry = None
