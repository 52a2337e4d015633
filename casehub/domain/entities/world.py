"""World domain entity.

A world is a tenant (business line) with its own branding and access
boundary. Worlds are read-only from the core's point of view.
"""

from dataclasses import dataclass

from casehub.domain.exceptions import ValidationException
from casehub.domain.value_objects.core import ThemeColors, WorldCode, WorldRef


@dataclass(frozen=True)
class WorldEntity:
    """Domain entity for a world. Validation runs on construction."""

    id: str
    code: WorldCode
    name: str
    description: str | None = None
    theme_colors: ThemeColors | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationException("World ID is required", field="id")
        if not self.name or not self.name.strip():
            raise ValidationException("World name is required", field="name")

    def has_code(self, code: str) -> bool:
        """Return whether this world's code equals code (case-sensitive)."""
        return self.code.value == code

    def ref(self) -> WorldRef:
        """Return the denormalized {id, code, name} reference used by transfers."""
        return WorldRef(id=self.id, code=self.code.value, name=self.name)
