"""Infrastructure services: RBAC seed."""

from itam.infrastructure.services.rbac_seed_service import (
    BUILT_IN_ROLES,
    SYSTEM_PERMISSIONS,
    seed_catalog_and_roles,
)

__all__ = [
    "BUILT_IN_ROLES",
    "SYSTEM_PERMISSIONS",
    "seed_catalog_and_roles",
]
