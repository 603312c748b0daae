"""Permission catalog repository (SQLAlchemy). Reads return PermissionEntity."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from itam.domain.entities.permission import PermissionEntity
from itam.domain.exceptions import DuplicatePermissionKeyException, ResourceNotFoundException
from itam.infrastructure.persistence.models.permission import Permission
from itam.infrastructure.persistence.repositories.base import BaseRepository


def _permission_to_entity(p: Permission) -> PermissionEntity:
    """Map ORM Permission to the domain entity."""
    return PermissionEntity(
        key=p.key,
        category=p.category,
        description=p.description or "",
        is_critical=p.is_critical,
        is_active=p.is_active,
    )


class PermissionRepository(BaseRepository[Permission]):
    """Permission catalog store. Implements IPermissionRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Permission)

    def _duplicate_error(self, obj: Permission) -> Exception:
        return DuplicatePermissionKeyException(obj.key)

    async def get_by_key(self, key: str) -> PermissionEntity | None:
        row = await self.get_one_by(key=key)
        return _permission_to_entity(row) if row else None

    async def list_all(self, *, include_inactive: bool = False) -> list[PermissionEntity]:
        rows = await self.get_all(Permission.category, Permission.key)
        return [
            _permission_to_entity(p) for p in rows if include_inactive or p.is_active
        ]

    async def create(self, permission: PermissionEntity) -> PermissionEntity:
        parsed = permission.parsed_key
        row = Permission(
            key=permission.key,
            resource=parsed.resource,
            action=parsed.action,
            category=permission.category.value,
            description=permission.description or None,
            is_critical=permission.is_critical,
            is_active=permission.is_active,
        )
        created = await self.insert(row)
        return _permission_to_entity(created)

    async def update(self, permission: PermissionEntity) -> PermissionEntity:
        row = await self.get_one_by(key=permission.key)
        if row is None:
            raise ResourceNotFoundException("permission", permission.key)
        row.category = permission.category.value
        row.description = permission.description or None
        row.is_critical = permission.is_critical
        row.is_active = permission.is_active
        saved = await self.save(row)
        return _permission_to_entity(saved)
