"""Permission catalog service: registry of atomic permission keys grouped by category."""

from __future__ import annotations

from collections.abc import Collection

from itam.application.interfaces.repositories import IPermissionRepository
from itam.application.services.permission_resolver import has_permission
from itam.domain.entities.permission import PermissionEntity
from itam.domain.enums import PermissionCategory
from itam.domain.exceptions import (
    DuplicatePermissionKeyException,
    ResourceNotFoundException,
    ValidationException,
)
from itam.domain.value_objects.core import WILDCARD, PermissionKey
from itam.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def _canonical(key: str) -> str:
    try:
        return PermissionKey.parse(key).value
    except ValueError as exc:
        raise ValidationException(str(exc), field="key") from exc


class PermissionCatalogService:
    """Register, list and look up catalog permissions."""

    def __init__(self, permission_repo: IPermissionRepository) -> None:
        self._permission_repo = permission_repo

    async def register(self, permission: PermissionEntity) -> PermissionEntity:
        """Add a permission to the catalog.

        Raises:
            ValidationException: If the key is the wildcard (not a catalog entry).
            DuplicatePermissionKeyException: If the key already exists.
        """
        if permission.key == WILDCARD:
            raise ValidationException("The wildcard cannot be registered as a permission", field="key")
        if await self._permission_repo.get_by_key(permission.key):
            raise DuplicatePermissionKeyException(permission.key)
        created = await self._permission_repo.create(permission)
        logger.info("Registered permission %s (%s)", created.key, created.category.value)
        return created

    async def list_active(self) -> list[PermissionEntity]:
        """Active permissions ordered by (category, key)."""
        permissions = await self._permission_repo.list_all(include_inactive=False)
        return sorted((p for p in permissions if p.is_active), key=PermissionEntity.sort_key)

    async def group_by_category(self) -> dict[PermissionCategory, list[PermissionEntity]]:
        """Active permissions keyed by category, each list ordered by key."""
        grouped: dict[PermissionCategory, list[PermissionEntity]] = {}
        for permission in await self.list_active():
            grouped.setdefault(permission.category, []).append(permission)
        return grouped

    async def get(self, key: str) -> PermissionEntity:
        """Return the permission for key (active or not).

        Raises:
            ResourceNotFoundException: If the key is not in the catalog.
        """
        canonical = _canonical(key)
        permission = await self._permission_repo.get_by_key(canonical)
        if permission is None:
            raise ResourceNotFoundException("permission", canonical)
        return permission

    async def exists(self, key: str) -> bool:
        try:
            canonical = PermissionKey.parse(key).value
        except ValueError:
            return False
        return await self._permission_repo.get_by_key(canonical) is not None

    async def is_active(self, key: str) -> bool:
        try:
            canonical = PermissionKey.parse(key).value
        except ValueError:
            return False
        permission = await self._permission_repo.get_by_key(canonical)
        return permission is not None and permission.is_active

    async def deactivate(self, key: str) -> PermissionEntity:
        """Hide a permission from listings. Principal snapshots keep the grant.

        Raises:
            ResourceNotFoundException: If the key is not in the catalog.
        """
        permission = await self.get(key)
        if not permission.is_active:
            return permission
        permission.deactivate()
        updated = await self._permission_repo.update(permission)
        logger.info("Deactivated permission %s", updated.key)
        return updated

    async def expand(self, permissions: Collection[str] | None) -> list[str]:
        """Active catalog keys granted by a permission set, in catalog order.

        The wildcard expands to every active key.
        """
        return [p.key for p in await self.list_active() if has_permission(permissions, p.key)]
