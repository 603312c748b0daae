"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from itam.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from itam.api.v1.endpoints import authz, me, permissions, roles

api_router = APIRouter()

api_router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
api_router.include_router(roles.router, prefix="/roles", tags=["roles"])
api_router.include_router(me.router, prefix="/me", tags=["me"])
api_router.include_router(authz.router, prefix="/authz", tags=["authz"])
