"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags.
"""

from fastapi import APIRouter

from casehub.api.v1.endpoints import access, admin, auth, health, transfers

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(access.router, prefix="/me", tags=["access"])
api_router.include_router(transfers.router, prefix="/worlds", tags=["transfers"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
