"""Access API: the caller's roles, worlds and boolean gates for the UI shell."""

from fastapi import APIRouter, Depends

from casehub.api.v1.dependencies import (
    get_access_control,
    get_current_session,
    get_session_loader,
    get_session_registry,
)
from casehub.application.dtos.access import AccessSnapshot, SessionInfo
from casehub.application.services.access_control import AccessControl
from casehub.application.services.session_loader import SessionLoader
from casehub.core.session_registry import SessionRegistry
from casehub.domain.enums import Role
from casehub.domain.exceptions import AuthorizationException
from casehub.schemas.access import (
    AccessResponse,
    CurrentWorldUpdate,
    ProfileResponse,
    WorldAccessResponse,
    WorldResponse,
)

router = APIRouter()


def _to_response(snapshot: AccessSnapshot) -> AccessResponse:
    profile = snapshot.profile
    return AccessResponse(
        user_id=snapshot.user_id or "",
        profile=(
            ProfileResponse(
                id=profile.id, email=profile.email, display_name=profile.display_name
            )
            if profile
            else None
        ),
        roles=sorted(r.value for r in snapshot.roles),
        is_super_admin=Role.SUPERADMIN in snapshot.roles,
        accessible_worlds=[WorldResponse.from_entity(w) for w in snapshot.accessible_worlds],
        current_world=(
            WorldResponse.from_entity(snapshot.current_world)
            if snapshot.current_world
            else None
        ),
    )


@router.get("/access", response_model=AccessResponse)
async def get_my_access(access: AccessControl = Depends(get_access_control)):
    """Return the caller's roles and accessible worlds."""
    return _to_response(access.snapshot())


@router.get("/worlds/{world_code}/access", response_model=WorldAccessResponse)
async def get_world_access(
    world_code: str,
    access: AccessControl = Depends(get_access_control),
):
    """Return whether the caller may operate within world_code. Never 403."""
    return WorldAccessResponse(
        world_code=world_code, has_access=access.has_world_access(world_code)
    )


@router.put("/current-world", response_model=AccessResponse)
async def set_current_world(
    body: CurrentWorldUpdate,
    access: AccessControl = Depends(get_access_control),
):
    """Select the world the caller is working in (must be accessible)."""
    if body.world_code is None:
        access.set_current_world(None)
        return _to_response(access.snapshot())
    world = access.find_accessible_world(body.world_code)
    if world is None:
        raise AuthorizationException(
            message=f"No access to world {body.world_code}", world_code=body.world_code
        )
    access.set_current_world(world)
    return _to_response(access.snapshot())


@router.post("/refresh", response_model=AccessResponse)
async def refresh_my_access(
    session: SessionInfo = Depends(get_current_session),
    registry: SessionRegistry = Depends(get_session_registry),
    loader: SessionLoader = Depends(get_session_loader),
):
    """Re-fetch roles and worlds from the store (e.g. after a grant changed)."""
    access = await registry.refresh(session, loader)
    return _to_response(access.snapshot())
