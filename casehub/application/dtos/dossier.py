"""DTOs for dossiers (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DossierResult:
    """Dossier read-model: identity and the world that owns it."""

    id: str
    world_id: str
    title: str | None = None
    status: str | None = None
