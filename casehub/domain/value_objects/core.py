"""Domain value objects for casehub.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass

# Hex (#rgb, #rrggbb), hsl()/hsla() functions, or a bare HSL triplet such as "220 90% 56%".
_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_HSL_FUNC_RE = re.compile(r"^hsla?\(\s*[^()]+\)$")
_HSL_TRIPLET_RE = re.compile(r"^\d{1,3}(?:\.\d+)?\s+\d{1,3}(?:\.\d+)?%\s+\d{1,3}(?:\.\d+)?%$")


def is_color(value: str) -> bool:
    """Return whether value is a well-formed hex or HSL color string."""
    value = value.strip()
    return bool(
        _HEX_COLOR_RE.match(value)
        or _HSL_FUNC_RE.match(value)
        or _HSL_TRIPLET_RE.match(value)
    )


@dataclass(frozen=True)
class WorldCode:
    """Value object for a world code (e.g. 'JDE').

    Codes are compared case-sensitively and are never normalized; they are
    the external-facing discriminator used in routes and badges.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("World code must be a non-empty string")
        if self.value != self.value.strip():
            raise ValueError("World code must not have surrounding whitespace")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ThemeColors:
    """Presentation triple for a world's branding. Each entry must be a color."""

    primary: str
    accent: str
    neutral: str

    def __post_init__(self) -> None:
        for name in ("primary", "accent", "neutral"):
            value = getattr(self, name)
            if not isinstance(value, str) or not is_color(value):
                raise ValueError(f"theme_colors.{name} is not a valid color: {value!r}")

    def to_dict(self) -> dict[str, str]:
        return {"primary": self.primary, "accent": self.accent, "neutral": self.neutral}


@dataclass(frozen=True)
class WorldRef:
    """Denormalized world reference carried by a transfer for display."""

    id: str
    code: str
    name: str
