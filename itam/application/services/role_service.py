"""Role application service: create roles, edit their permission sets, guard built-ins."""

from __future__ import annotations

from collections.abc import Iterable

from itam.application.interfaces.repositories import IPermissionRepository, IRoleRepository
from itam.application.services.permission_resolver import has_permission
from itam.domain.entities.role import RoleEntity, normalize_permission_keys, normalize_role_name
from itam.domain.enums import RoleCategory
from itam.domain.exceptions import (
    DuplicateRoleNameException,
    ResourceNotFoundException,
    ValidationException,
)
from itam.domain.value_objects.core import WILDCARD, ScopeCapability
from itam.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class RoleService:
    """Role lifecycle on top of the role store.

    When a permission repository is given, every key assigned to a role
    must exist in the catalog (the wildcard is always accepted).
    """

    def __init__(
        self,
        role_repo: IRoleRepository,
        permission_repo: IPermissionRepository | None = None,
    ) -> None:
        self._role_repo = role_repo
        self._permission_repo = permission_repo

    @staticmethod
    def has_permission(role: RoleEntity, key: str) -> bool:
        """True if the role's set holds the wildcard or exactly key."""
        return has_permission(role.permissions, key)

    @staticmethod
    def explicit_permissions(role: RoleEntity) -> set[str]:
        """Permission keys of the role excluding the wildcard."""
        return role.explicit_permissions()

    async def create(
        self,
        name: str,
        permissions: Iterable[str] = (),
        *,
        scope_capability: ScopeCapability | None = None,
        priority: int = 100,
        display_name: str = "",
        description: str = "",
        category: RoleCategory = RoleCategory.CUSTOM,
        is_protected: bool = False,
    ) -> RoleEntity:
        """Create a role.

        Raises:
            ValidationException: If name, priority or a permission key is invalid,
                or a key is not in the catalog.
            DuplicateRoleNameException: If a role with the name already exists.
        """
        role = RoleEntity(
            name=name,
            permissions=set(permissions),
            priority=priority,
            scope_capability=scope_capability or ScopeCapability(),
            display_name=display_name,
            description=description,
            category=category,
            is_protected=is_protected,
        )
        if await self._role_repo.get_by_name(role.name):
            raise DuplicateRoleNameException(role.name)
        await self._ensure_known(role.permissions)
        created = await self._role_repo.create(role)
        logger.info(
            "Created role %s with %d permission(s)", created.name, len(created.permissions)
        )
        return created

    async def get(self, name: str) -> RoleEntity:
        """Return the role.

        Raises:
            ResourceNotFoundException: If no role has that name.
        """
        key = (name or "").strip().lower()
        role = await self._role_repo.get_by_name(key)
        if role is None:
            raise ResourceNotFoundException("role", key)
        return role

    async def list_roles(self, *, include_inactive: bool = True) -> list[RoleEntity]:
        """Roles ordered by (priority, name); lower priority is more privileged."""
        roles = await self._role_repo.list_all(include_inactive=include_inactive)
        if not include_inactive:
            roles = [r for r in roles if r.is_active]
        return sorted(roles, key=lambda r: (r.priority, r.name))

    async def add_permissions(self, name: str, keys: Iterable[str]) -> RoleEntity:
        """Union keys into the role (idempotent)."""
        role = await self.get(name)
        incoming = normalize_permission_keys(keys)
        await self._ensure_known(incoming)
        added = role.add_permissions(incoming)
        if not added:
            return role
        updated = await self._role_repo.update(role)
        logger.info("Role %s: added permissions %s", role.name, sorted(added))
        return updated

    async def remove_permissions(self, name: str, keys: Iterable[str]) -> RoleEntity:
        """Remove keys from the role; absent keys are a no-op."""
        role = await self.get(name)
        removed = role.remove_permissions(keys)
        if not removed:
            return role
        updated = await self._role_repo.update(role)
        logger.info("Role %s: removed permissions %s", role.name, sorted(removed))
        return updated

    async def update_details(
        self,
        name: str,
        *,
        display_name: str | None = None,
        description: str | None = None,
        priority: int | None = None,
        scope_capability: ScopeCapability | None = None,
        is_active: bool | None = None,
    ) -> RoleEntity:
        """Edit descriptive fields, priority, scope capability or active flag.

        Allowed on protected roles, except deactivating them.

        Raises:
            ProtectedRoleViolationException: If is_active is False on a protected role.
        """
        role = await self.get(name)
        if display_name is not None:
            role.display_name = display_name
        if description is not None:
            role.description = description
        if priority is not None:
            role.priority = priority
        if scope_capability is not None:
            role.scope_capability = scope_capability
        if is_active is False:
            role.deactivate()
        elif is_active:
            role.is_active = True
        role.validate()
        return await self._role_repo.update(role)

    async def rename(self, name: str, new_name: str) -> RoleEntity:
        """Rename an unprotected role.

        Raises:
            ProtectedRoleViolationException: If the role is protected.
            DuplicateRoleNameException: If new_name is taken.
        """
        role = await self.get(name)
        target = normalize_role_name(new_name)
        if target == role.name:
            return role
        previous = role.name
        role.rename(target)
        if await self._role_repo.get_by_name(target):
            raise DuplicateRoleNameException(target)
        updated = await self._role_repo.update(role, previous_name=previous)
        logger.info("Renamed role %s to %s", previous, updated.name)
        return updated

    async def delete(self, name: str) -> None:
        """Delete an unprotected role.

        Raises:
            ProtectedRoleViolationException: If the role is protected.
            ResourceNotFoundException: If no role has that name.
        """
        role = await self.get(name)
        role.ensure_deletable()
        if not await self._role_repo.delete(role.name):
            raise ResourceNotFoundException("role", role.name)
        logger.info("Deleted role %s", role.name)

    async def _ensure_known(self, keys: Iterable[str]) -> None:
        if self._permission_repo is None:
            return
        for key in sorted(keys):
            if key == WILDCARD:
                continue
            permission = await self._permission_repo.get_by_key(key)
            if permission is None:
                raise ValidationException(f"Invalid permission key: {key}", field="permissions")
            if not permission.is_active:
                raise ValidationException(
                    f"Permission key is deactivated: {key}", field="permissions"
                )
