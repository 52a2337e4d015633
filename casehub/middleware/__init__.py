"""HTTP middleware (request id). Applied in casehub.main."""

from casehub.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
