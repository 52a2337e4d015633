"""Dossier and DossierTransfer ORM models."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from casehub.domain.enums import TransferStatus
from casehub.infrastructure.persistence.database import Base
from casehub.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin


class Dossier(CuidMixin, CreatedAtMixin, Base):
    """Case file owned by exactly one world. Table: dossiers."""

    __tablename__ = "dossiers"

    world_id: Mapped[str] = mapped_column(
        String, ForeignKey("worlds.id"), nullable=False, index=True
    )
    owner_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True
    )
    title: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="nouveau")


class DossierTransfer(CuidMixin, CreatedAtMixin, Base):
    """Cross-world transfer of a dossier. Table: dossier_transfers."""

    __tablename__ = "dossier_transfers"

    transfer_type: Mapped[str] = mapped_column(String, nullable=False)
    transfer_status: Mapped[str] = mapped_column(
        String, nullable=False, default=TransferStatus.SCHEDULED.value
    )
    transferred_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    source_dossier_id: Mapped[str] = mapped_column(
        String, ForeignKey("dossiers.id"), nullable=False, index=True
    )
    target_dossier_id: Mapped[str] = mapped_column(
        String, ForeignKey("dossiers.id"), nullable=False, index=True
    )
    source_world_id: Mapped[str] = mapped_column(
        String, ForeignKey("worlds.id"), nullable=False
    )
    target_world_id: Mapped[str] = mapped_column(
        String, ForeignKey("worlds.id"), nullable=False
    )

    __table_args__ = (
        CheckConstraint(
            "transfer_status IN ({})".format(
                ", ".join(f"'{v}'" for v in TransferStatus.values())
            ),
            name="dossier_transfers_status_check",
        ),
        CheckConstraint(
            "source_world_id <> target_world_id",
            name="dossier_transfers_cross_world_check",
        ),
        Index("ix_dossier_transfers_status_time", "transfer_status", "transferred_at"),
    )
