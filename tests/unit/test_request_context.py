"""Unit tests for request context binding and the logging filter."""

import logging

from casehub.middleware.request_id import sanitize_request_id
from casehub.shared.context import (
    bind_principal,
    bind_request_id,
    get_request_context,
    reset_request_id,
)
from casehub.shared.telemetry.logging import RequestContextFilter


def _record() -> logging.LogRecord:
    return logging.LogRecord("casehub", logging.INFO, __file__, 1, "msg", None, None)


def test_filter_uses_placeholder_outside_request() -> None:
    record = _record()
    assert RequestContextFilter().filter(record)
    assert record.request_id == "-"


def test_filter_attaches_bound_values() -> None:
    token = bind_request_id("req-1")
    try:
        bind_principal("u-editor", "s-1")
        record = _record()
        RequestContextFilter().filter(record)
        assert record.request_id == "req-1"
        assert record.user_id == "u-editor"
        assert get_request_context().session_id == "s-1"
    finally:
        reset_request_id(token)
        bind_principal(None, None)
    assert get_request_context().request_id is None


def test_sanitize_request_id() -> None:
    assert sanitize_request_id("abc-123_X") == "abc-123_X"
    assert sanitize_request_id("  padded  ") == "padded"
    for raw in (None, "", "has space", "x" * 65, "semi;colon"):
        generated = sanitize_request_id(raw)
        assert generated != raw
        assert len(generated) == 32
