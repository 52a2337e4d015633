"""World ORM model. Root entity for the per-world hierarchy."""

from typing import Any

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from casehub.infrastructure.persistence.database import Base
from casehub.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin


class World(CuidMixin, CreatedAtMixin, Base):
    """World (business line). Table: worlds. Code is unique and immutable."""

    __tablename__ = "worlds"

    code: Mapped[str] = mapped_column(String, unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    theme_colors: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
