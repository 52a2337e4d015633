"""Initial schema: worlds, profiles, roles, grants, dossiers, transfers

Revision ID: 3f1a9c2d7b40
Revises:
Create Date: 2025-03-10 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1a9c2d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=True,
    )


def upgrade() -> None:
    """Create the tables read by access control and the transfer ledger."""
    op.create_table(
        "worlds",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("code", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("theme_colors", sa.JSON(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )
    op.create_index(op.f("ix_worlds_code"), "worlds", ["code"], unique=True)

    op.create_table(
        "profiles",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("display_name", sa.String(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "roles",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("label", sa.String(), nullable=False),
        _created_at(),
        sa.CheckConstraint(
            "name IN ('superadmin', 'admin', 'editor', 'viewer')", name="roles_name_check"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "user_roles",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("role_id", sa.String(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "role_id", name="uq_user_roles"),
    )
    op.create_index(op.f("ix_user_roles_user_id"), "user_roles", ["user_id"], unique=False)

    op.create_table(
        "user_world_access",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("world_id", sa.String(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["world_id"], ["worlds.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "world_id", name="uq_user_world_access"),
    )
    op.create_index(
        op.f("ix_user_world_access_user_id"), "user_world_access", ["user_id"], unique=False
    )

    op.create_table(
        "dossiers",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("world_id", sa.String(), nullable=False),
        sa.Column("owner_id", sa.String(), nullable=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["world_id"], ["worlds.id"]),
        sa.ForeignKeyConstraint(["owner_id"], ["profiles.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_dossiers_world_id"), "dossiers", ["world_id"], unique=False)

    op.create_table(
        "dossier_transfers",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("transfer_type", sa.String(), nullable=False),
        sa.Column("transfer_status", sa.String(), nullable=False),
        sa.Column("transferred_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("source_dossier_id", sa.String(), nullable=False),
        sa.Column("target_dossier_id", sa.String(), nullable=False),
        sa.Column("source_world_id", sa.String(), nullable=False),
        sa.Column("target_world_id", sa.String(), nullable=False),
        _created_at(),
        sa.CheckConstraint(
            "transfer_status IN ('scheduled', 'completed', 'cancelled')",
            name="dossier_transfers_status_check",
        ),
        sa.CheckConstraint(
            "source_world_id <> target_world_id",
            name="dossier_transfers_cross_world_check",
        ),
        sa.ForeignKeyConstraint(["source_dossier_id"], ["dossiers.id"]),
        sa.ForeignKeyConstraint(["target_dossier_id"], ["dossiers.id"]),
        sa.ForeignKeyConstraint(["source_world_id"], ["worlds.id"]),
        sa.ForeignKeyConstraint(["target_world_id"], ["worlds.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_dossier_transfers_source_dossier_id"),
        "dossier_transfers",
        ["source_dossier_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_dossier_transfers_target_dossier_id"),
        "dossier_transfers",
        ["target_dossier_id"],
        unique=False,
    )
    op.create_index(
        "ix_dossier_transfers_status_time",
        "dossier_transfers",
        ["transfer_status", "transferred_at"],
        unique=False,
    )


def downgrade() -> None:
    """Drop all casehub tables."""
    op.drop_index("ix_dossier_transfers_status_time", table_name="dossier_transfers")
    op.drop_index(
        op.f("ix_dossier_transfers_target_dossier_id"), table_name="dossier_transfers"
    )
    op.drop_index(
        op.f("ix_dossier_transfers_source_dossier_id"), table_name="dossier_transfers"
    )
    op.drop_table("dossier_transfers")
    op.drop_index(op.f("ix_dossiers_world_id"), table_name="dossiers")
    op.drop_table("dossiers")
    op.drop_index(op.f("ix_user_world_access_user_id"), table_name="user_world_access")
    op.drop_table("user_world_access")
    op.drop_index(op.f("ix_user_roles_user_id"), table_name="user_roles")
    op.drop_table("user_roles")
    op.drop_table("roles")
    op.drop_table("profiles")
    op.drop_index(op.f("ix_worlds_code"), table_name="worlds")
    op.drop_table("worlds")
