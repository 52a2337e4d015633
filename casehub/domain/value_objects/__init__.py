"""Domain value objects (immutable, self-validating)."""

from casehub.domain.value_objects.core import ThemeColors, WorldCode, WorldRef, is_color

__all__ = [
    "ThemeColors",
    "WorldCode",
    "WorldRef",
    "is_color",
]
