"""SQLAlchemy ORM models. Importing this package registers every table on Base.metadata."""

from itam.infrastructure.persistence.models.permission import Permission
from itam.infrastructure.persistence.models.role import Role, RolePermission

__all__ = [
    "Permission",
    "Role",
    "RolePermission",
]
