"""Persistence repositories. Re-exports for dependency injection."""

from itam.infrastructure.persistence.repositories.base import BaseRepository
from itam.infrastructure.persistence.repositories.memory import (
    InMemoryPermissionRepository,
    InMemoryRoleRepository,
    MemoryStore,
)
from itam.infrastructure.persistence.repositories.permission_repo import (
    PermissionRepository,
)
from itam.infrastructure.persistence.repositories.role_repo import RoleRepository

__all__ = [
    "BaseRepository",
    "InMemoryPermissionRepository",
    "InMemoryRoleRepository",
    "MemoryStore",
    "PermissionRepository",
    "RoleRepository",
]
