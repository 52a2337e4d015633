"""Auth API: session logout. Token issuance belongs to the external provider."""

from fastapi import APIRouter, Depends, Response

from casehub.api.v1.dependencies import get_current_session, get_session_registry
from casehub.application.dtos.access import SessionInfo
from casehub.core.session_registry import SessionRegistry

router = APIRouter()


@router.post("/logout", status_code=204)
async def logout(
    session: SessionInfo = Depends(get_current_session),
    registry: SessionRegistry = Depends(get_session_registry),
) -> Response:
    """Clear every authorization field of the session and revoke it until the token expires."""
    registry.logout(session.session_id, expires_at=session.expires_at)
    return Response(status_code=204)
