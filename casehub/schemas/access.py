"""Access API schemas (session roles, worlds, gates)."""

from pydantic import BaseModel, Field

from casehub.domain.entities.world import WorldEntity


class ThemeColorsResponse(BaseModel):
    primary: str
    accent: str
    neutral: str


class WorldResponse(BaseModel):
    """World as shown to the UI shell."""

    id: str
    code: str
    name: str
    description: str | None = None
    theme_colors: ThemeColorsResponse | None = None

    @classmethod
    def from_entity(cls, world: WorldEntity) -> "WorldResponse":
        return cls(
            id=world.id,
            code=world.code.value,
            name=world.name,
            description=world.description,
            theme_colors=(
                ThemeColorsResponse(**world.theme_colors.to_dict())
                if world.theme_colors
                else None
            ),
        )


class ProfileResponse(BaseModel):
    id: str
    email: str
    display_name: str | None = None


class AccessResponse(BaseModel):
    """Response for GET /me/access."""

    user_id: str
    profile: ProfileResponse | None = None
    roles: list[str] = Field(default_factory=list, description="Sorted role names")
    is_super_admin: bool = False
    accessible_worlds: list[WorldResponse] = Field(default_factory=list)
    current_world: WorldResponse | None = None


class WorldAccessResponse(BaseModel):
    """Response for GET /me/worlds/{world_code}/access."""

    world_code: str
    has_access: bool


class CurrentWorldUpdate(BaseModel):
    """Request body for PUT /me/current-world (null clears the selection)."""

    world_code: str | None = Field(default=None, description="Code of an accessible world")
