"""Security: bearer token verification."""

from casehub.infrastructure.security.jwt import session_from_token, verify_token

__all__ = ["session_from_token", "verify_token"]
