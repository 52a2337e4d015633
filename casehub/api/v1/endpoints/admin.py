"""Administration API: global surfaces gated only on the superadmin role."""

from fastapi import APIRouter, Depends

from casehub.api.v1.dependencies import get_world_directory, require_superadmin
from casehub.application.services.access_control import AccessControl
from casehub.application.services.world_directory import WorldDirectory
from casehub.domain.exceptions import ResourceNotFoundException
from casehub.schemas.access import WorldResponse

router = APIRouter()


@router.get("/worlds", response_model=list[WorldResponse])
async def list_all_worlds(
    access: AccessControl = Depends(require_superadmin),
    directory: WorldDirectory = Depends(get_world_directory),
):
    """Return every world, whether or not the superadmin has access to it."""
    worlds = await directory.list_worlds()
    return [WorldResponse.from_entity(w) for w in worlds]


@router.get("/worlds/{world_code}", response_model=WorldResponse)
async def get_world(
    world_code: str,
    access: AccessControl = Depends(require_superadmin),
    directory: WorldDirectory = Depends(get_world_directory),
):
    world = await directory.get_by_code(world_code)
    if world is None:
        raise ResourceNotFoundException("world", world_code)
    return WorldResponse.from_entity(world)
