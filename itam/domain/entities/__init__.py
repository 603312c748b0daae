"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from itam.domain.entities.permission import PermissionEntity
from itam.domain.entities.principal import Principal
from itam.domain.entities.role import RoleEntity

__all__ = [
    "PermissionEntity",
    "Principal",
    "RoleEntity",
]
