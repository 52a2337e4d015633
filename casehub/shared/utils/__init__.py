"""Shared utilities (datetime, id generation)."""

from casehub.shared.utils.datetime import ensure_utc, parse_utc, utc_now
from casehub.shared.utils.generators import generate_cuid

__all__ = ["ensure_utc", "generate_cuid", "parse_utc", "utc_now"]
