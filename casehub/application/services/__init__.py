"""Application services: access control, session loading, transfer ledger."""

from casehub.application.services.access_control import AccessControl
from casehub.application.services.dossier_directory import DossierDirectory
from casehub.application.services.session_loader import SessionLoader
from casehub.application.services.transfer_ledger import TransferLedger
from casehub.application.services.world_directory import WorldDirectory

__all__ = [
    "AccessControl",
    "DossierDirectory",
    "SessionLoader",
    "TransferLedger",
    "WorldDirectory",
]
