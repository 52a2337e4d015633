"""Request context held in contextvars.

Async-safe storage for the request id and the authenticated principal of
the current request, so log records can carry them without threading
arguments through every call.
"""

from contextvars import ContextVar, Token
from dataclasses import dataclass

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_user_id: ContextVar[str | None] = ContextVar("user_id", default=None)
_session_id: ContextVar[str | None] = ContextVar("session_id", default=None)


@dataclass(frozen=True)
class RequestContext:
    """Immutable snapshot of the current request context."""

    request_id: str | None
    user_id: str | None
    session_id: str | None


def bind_request_id(request_id: str) -> Token:
    """Set the request id for the current task. Pass the token to reset_request_id."""
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)


def bind_principal(user_id: str | None, session_id: str | None) -> None:
    """Record the authenticated user and session for this request."""
    _user_id.set(user_id)
    _session_id.set(session_id)


def get_request_context() -> RequestContext:
    return RequestContext(
        request_id=_request_id.get(),
        user_id=_user_id.get(),
        session_id=_session_id.get(),
    )
