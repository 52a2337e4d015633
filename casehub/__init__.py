"""casehub: world-scoped access control and dossier transfer ledger."""

__version__ = "1.0.0"
