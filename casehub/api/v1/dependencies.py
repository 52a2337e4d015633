"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the record store, the per-session
AccessControl handle, and application services. Routes depend only on these
dependencies, not on infrastructure directly.
"""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from casehub.application.dtos.access import SessionInfo
from casehub.application.dtos.dossier import DossierResult
from casehub.application.interfaces.store import IRecordStore
from casehub.application.services.access_control import AccessControl
from casehub.application.services.dossier_directory import DossierDirectory
from casehub.application.services.session_loader import SessionLoader
from casehub.application.services.transfer_ledger import TransferLedger
from casehub.application.services.world_directory import WorldDirectory
from casehub.core.config import get_settings
from casehub.core.lifespan import build_record_store
from casehub.core.session_registry import SessionRegistry
from casehub.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ResourceNotFoundException,
)
from casehub.infrastructure.security.jwt import session_from_token
from casehub.shared.context import bind_principal

_bearer = HTTPBearer(auto_error=False)


def get_record_store(request: Request) -> IRecordStore:
    """Record store from app.state; built on first use when lifespan did not run."""
    store = getattr(request.app.state, "record_store", None)
    if store is None:
        store = build_record_store(get_settings())
        request.app.state.record_store = store
    return store


def get_session_registry(request: Request) -> SessionRegistry:
    registry = getattr(request.app.state, "session_registry", None)
    if registry is None:
        registry = SessionRegistry()
        request.app.state.session_registry = registry
    return registry


def get_session_loader(store: IRecordStore = Depends(get_record_store)) -> SessionLoader:
    return SessionLoader(store)


def get_transfer_ledger(store: IRecordStore = Depends(get_record_store)) -> TransferLedger:
    return TransferLedger(store, history_limit=get_settings().transfer_history_limit)


def get_world_directory(store: IRecordStore = Depends(get_record_store)) -> WorldDirectory:
    return WorldDirectory(store)


def get_dossier_directory(store: IRecordStore = Depends(get_record_store)) -> DossierDirectory:
    return DossierDirectory(store)


async def get_current_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> SessionInfo:
    """Verify the bearer token and return its session. 401 when missing or invalid."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("Missing bearer token")
    try:
        session = session_from_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException(str(e)) from e
    bind_principal(session.user_id, session.session_id)
    return session


async def get_access_control(
    session: SessionInfo = Depends(get_current_session),
    registry: SessionRegistry = Depends(get_session_registry),
    loader: SessionLoader = Depends(get_session_loader),
) -> AccessControl:
    """AccessControl handle for the caller's session (loaded on first use)."""
    return await registry.get_or_load(session, loader)


def require_world_access(
    world_code: str,
    access: AccessControl = Depends(get_access_control),
) -> AccessControl:
    """Gate a world-scoped route on explicit membership. Superadmin does not bypass it."""
    if not access.has_world_access(world_code):
        raise AuthorizationException(
            message=f"No access to world {world_code}", world_code=world_code
        )
    return access


def require_superadmin(access: AccessControl = Depends(get_access_control)) -> AccessControl:
    """Gate a global administration route purely on the superadmin role."""
    if not access.is_super_admin():
        raise AuthorizationException(resource="administration", action="read")
    return access


async def require_dossier_in_world(
    world_code: str,
    dossier_id: str,
    access: AccessControl = Depends(require_world_access),
    directory: DossierDirectory = Depends(get_dossier_directory),
) -> DossierResult:
    """Resolve dossier_id inside the gated world. 404 when absent or owned by another world."""
    world = access.find_accessible_world(world_code)
    dossier = await directory.find_in_world(dossier_id, world.id) if world else None
    if dossier is None:
        raise ResourceNotFoundException("dossier", dossier_id)
    return dossier
