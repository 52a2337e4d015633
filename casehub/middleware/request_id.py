"""Request ID middleware.

Forwards a client-supplied request id (or mints one), binds it to the
request context for log correlation and echoes it on the response. Raw
ASGI so streaming responses are untouched.
"""

import re
import uuid
from typing import Callable

from casehub.shared.context import bind_request_id, reset_request_id

REQUEST_ID_MAX_LENGTH = 64
_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9_-]+$")


def _header(scope: dict, name: bytes) -> str | None:
    for key, value in scope.get("headers", []):
        if key.lower() == name:
            return value.decode("latin-1")
    return None


def sanitize_request_id(raw: str | None) -> str:
    """Return raw when it is short and log-safe; otherwise a fresh uuid4 hex."""
    candidate = (raw or "").strip()
    if 0 < len(candidate) <= REQUEST_ID_MAX_LENGTH and _SAFE_REQUEST_ID.match(candidate):
        return candidate
    return uuid.uuid4().hex


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Wrap app so each HTTP request carries a request id end to end."""
    lookup = header_name.lower().encode()
    echo = header_name.encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        request_id = sanitize_request_id(_header(scope, lookup))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [*message.get("headers", []), (echo, request_id.encode())]
            await send(message)

        token = bind_request_id(request_id)
        try:
            await app(scope, receive, send_with_id)
        finally:
            reset_request_id(token)

    return asgi_app
