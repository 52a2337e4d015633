"""Bearer token verification.

Tokens are issued by the external auth provider and signed with the shared
secret from settings. Only verification happens here.
"""

from typing import Any

from jose import JWTError, jwt

from casehub.application.dtos.access import SessionInfo
from casehub.core.config import get_settings
from casehub.shared.utils.datetime import from_timestamp_utc


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp and sub.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True, "verify_aud": False},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload


def session_from_token(token: str) -> SessionInfo:
    """Verify token and build the SessionInfo it describes.

    The session id is the session_id claim when present, otherwise sub.
    """
    payload = verify_token(token)
    user_id = str(payload["sub"])
    return SessionInfo(
        session_id=str(payload.get("session_id") or user_id),
        user_id=user_id,
        expires_at=from_timestamp_utc(payload["exp"]),
    )
