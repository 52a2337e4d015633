"""Map raw store rows (plain dicts) to domain entities and DTOs.

Rows come from an external store, so every mapper raises RetrievalFailure
when a row is malformed. Domain rule violations (InconsistentTransfer) are
left to the caller, which decides whether to skip the record.
"""

from __future__ import annotations

import logging
from typing import Any

from casehub.application.dtos.access import ProfileResult
from casehub.application.dtos.dossier import DossierResult
from casehub.application.interfaces.store import (
    COLLECTION_DOSSIER_TRANSFERS,
    COLLECTION_DOSSIERS,
    COLLECTION_PROFILES,
    COLLECTION_WORLDS,
)
from casehub.domain.entities.transfer import TransferEntity
from casehub.domain.entities.world import WorldEntity
from casehub.domain.enums import TransferStatus
from casehub.domain.exceptions import RetrievalFailure, ValidationException
from casehub.domain.value_objects.core import ThemeColors, WorldCode
from casehub.shared.utils.datetime import parse_utc

logger = logging.getLogger(__name__)


def _theme_from_value(world_id: str, value: Any) -> ThemeColors | None:
    """Build ThemeColors; branding problems never cost a world its access."""
    if not value:
        return None
    try:
        return ThemeColors(
            primary=value["primary"],
            accent=value["accent"],
            neutral=value["neutral"],
        )
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Ignoring malformed theme_colors for world %s: %s", world_id, e)
        return None


def world_from_row(row: dict[str, Any]) -> WorldEntity:
    """Map a worlds row to WorldEntity."""
    try:
        return WorldEntity(
            id=str(row["id"]),
            code=WorldCode(row["code"]),
            name=row["name"],
            description=row.get("description"),
            theme_colors=_theme_from_value(str(row["id"]), row.get("theme_colors")),
        )
    except (KeyError, TypeError, ValueError, ValidationException) as e:
        raise RetrievalFailure(COLLECTION_WORLDS, f"malformed world row: {e}") from e


def profile_from_row(row: dict[str, Any]) -> ProfileResult:
    """Map a profiles row to ProfileResult."""
    try:
        return ProfileResult(
            id=str(row["id"]),
            email=row["email"],
            display_name=row.get("display_name"),
        )
    except (KeyError, TypeError) as e:
        raise RetrievalFailure(COLLECTION_PROFILES, f"malformed profile row: {e}") from e


def dossier_from_row(row: dict[str, Any]) -> DossierResult:
    """Map a dossiers row to DossierResult."""
    try:
        return DossierResult(
            id=str(row["id"]),
            world_id=str(row["world_id"]),
            title=row.get("title"),
            status=row.get("status"),
        )
    except (KeyError, TypeError) as e:
        raise RetrievalFailure(COLLECTION_DOSSIERS, f"malformed dossier row: {e}") from e


def transfer_from_row(row: dict[str, Any]) -> TransferEntity:
    """Map a dossier_transfers row to TransferEntity (world refs not resolved).

    Raises:
        RetrievalFailure: If the row lacks identifiers or has unparseable values.
        InconsistentTransfer: If the row breaks a cross-world invariant.
    """
    try:
        return TransferEntity(
            id=str(row["id"]),
            transfer_type=row.get("transfer_type") or "",
            status=TransferStatus(row["transfer_status"]),
            source_dossier_id=row["source_dossier_id"],
            target_dossier_id=row["target_dossier_id"],
            source_world_id=row.get("source_world_id"),
            target_world_id=row.get("target_world_id"),
            transferred_at=parse_utc(row.get("transferred_at")),
        )
    except (KeyError, TypeError, ValueError, ValidationException) as e:
        raise RetrievalFailure(
            COLLECTION_DOSSIER_TRANSFERS, f"malformed transfer row: {e}"
        ) from e
