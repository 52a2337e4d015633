"""Profile, Role, UserRole and UserWorldAccess ORM models (principal data)."""

from sqlalchemy import CheckConstraint, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from casehub.domain.enums import Role as RoleName
from casehub.infrastructure.persistence.database import Base
from casehub.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin


class Profile(CreatedAtMixin, Base):
    """User profile. Table: profiles. id is the auth provider's user id."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    email: Mapped[str] = mapped_column(String, nullable=False)
    display_name: Mapped[str | None] = mapped_column(String, nullable=True)


class Role(CuidMixin, CreatedAtMixin, Base):
    """Role catalogue. Table: roles. name is one of the app roles."""

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    label: Mapped[str] = mapped_column(String, nullable=False)

    __table_args__ = (
        CheckConstraint(
            "name IN ({})".format(", ".join(f"'{v}'" for v in RoleName.values())),
            name="roles_name_check",
        ),
    )


class UserRole(CuidMixin, CreatedAtMixin, Base):
    """Many-to-many user-role. Table: user_roles."""

    __tablename__ = "user_roles"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (UniqueConstraint("user_id", "role_id", name="uq_user_roles"),)


class UserWorldAccess(CuidMixin, CreatedAtMixin, Base):
    """World access grant. Table: user_world_access."""

    __tablename__ = "user_world_access"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    world_id: Mapped[str] = mapped_column(
        String, ForeignKey("worlds.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "world_id", name="uq_user_world_access"),
    )
