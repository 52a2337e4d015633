"""Application layer: use-case services, DTOs and ports.

Depends on the domain layer only; infrastructure is injected through the
protocols in casehub.application.interfaces.
"""
