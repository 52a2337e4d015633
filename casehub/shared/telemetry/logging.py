"""Logging configuration for the application.

Every record gets request_id and user_id attributes from the request
context ("-" outside a request), so log lines can be correlated with the
X-Request-ID response header.
"""

import logging
import sys

from casehub.core.config import get_settings
from casehub.shared.context import get_request_context

LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s %(user_id)s] %(message)s"
)


class RequestContextFilter(logging.Filter):
    """Attach the current request id and user id to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = get_request_context()
        record.request_id = context.request_id or "-"
        record.user_id = context.user_id or "-"
        return True


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    Output goes to stdout.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=[handler])
