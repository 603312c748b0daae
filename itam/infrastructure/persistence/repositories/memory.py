"""In-process record store for the 'memory' backend (bootstrap, tests).

Implements the same repository protocols as the SQL store. Entities are
copied on the way in and out so callers never share mutable state with
the store; check-and-insert runs without awaiting, so a duplicate can
only be raised by the insert itself.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from itam.domain.entities.permission import PermissionEntity
from itam.domain.entities.role import RoleEntity
from itam.domain.exceptions import (
    DuplicatePermissionKeyException,
    DuplicateRoleNameException,
    ResourceNotFoundException,
)


@dataclass
class MemoryStore:
    """Shared backing dicts; one instance per application."""

    permissions: dict[str, PermissionEntity] = field(default_factory=dict)
    roles: dict[str, RoleEntity] = field(default_factory=dict)


class InMemoryPermissionRepository:
    """Permission catalog store backed by MemoryStore. Implements IPermissionRepository."""

    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    async def get_by_key(self, key: str) -> PermissionEntity | None:
        permission = self._store.permissions.get(key)
        return copy.deepcopy(permission) if permission else None

    async def list_all(self, *, include_inactive: bool = False) -> list[PermissionEntity]:
        permissions = sorted(self._store.permissions.values(), key=PermissionEntity.sort_key)
        return [copy.deepcopy(p) for p in permissions if include_inactive or p.is_active]

    async def create(self, permission: PermissionEntity) -> PermissionEntity:
        if permission.key in self._store.permissions:
            raise DuplicatePermissionKeyException(permission.key)
        self._store.permissions[permission.key] = copy.deepcopy(permission)
        return copy.deepcopy(permission)

    async def update(self, permission: PermissionEntity) -> PermissionEntity:
        if permission.key not in self._store.permissions:
            raise ResourceNotFoundException("permission", permission.key)
        self._store.permissions[permission.key] = copy.deepcopy(permission)
        return copy.deepcopy(permission)


class InMemoryRoleRepository:
    """Role store backed by MemoryStore. Implements IRoleRepository."""

    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    async def get_by_name(self, name: str) -> RoleEntity | None:
        role = self._store.roles.get(name)
        return copy.deepcopy(role) if role else None

    async def list_all(self, *, include_inactive: bool = True) -> list[RoleEntity]:
        roles = sorted(self._store.roles.values(), key=lambda r: (r.priority, r.name))
        return [copy.deepcopy(r) for r in roles if include_inactive or r.is_active]

    async def create(self, role: RoleEntity) -> RoleEntity:
        if role.name in self._store.roles:
            raise DuplicateRoleNameException(role.name)
        self._store.roles[role.name] = copy.deepcopy(role)
        return copy.deepcopy(role)

    async def update(self, role: RoleEntity, *, previous_name: str | None = None) -> RoleEntity:
        lookup = previous_name or role.name
        if lookup not in self._store.roles:
            raise ResourceNotFoundException("role", lookup)
        if role.name != lookup and role.name in self._store.roles:
            raise DuplicateRoleNameException(role.name)
        del self._store.roles[lookup]
        self._store.roles[role.name] = copy.deepcopy(role)
        return copy.deepcopy(role)

    async def delete(self, name: str) -> bool:
        return self._store.roles.pop(name, None) is not None
