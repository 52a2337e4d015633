"""Telemetry: logging setup with request context."""

from casehub.shared.telemetry.logging import RequestContextFilter, setup_logging

__all__ = ["RequestContextFilter", "setup_logging"]
