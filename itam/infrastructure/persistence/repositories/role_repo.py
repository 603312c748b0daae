"""Role repository (SQLAlchemy). Reads return RoleEntity; permission keys live in role_permission."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from itam.domain.entities.role import RoleEntity
from itam.domain.exceptions import DuplicateRoleNameException, ResourceNotFoundException
from itam.domain.value_objects.core import ScopeCapability
from itam.infrastructure.persistence.models.role import Role, RolePermission
from itam.infrastructure.persistence.repositories.base import BaseRepository


def _role_to_entity(r: Role) -> RoleEntity:
    """Map ORM Role (with loaded permissions) to the domain entity."""
    return RoleEntity(
        name=r.name,
        permissions={rp.permission_key for rp in r.permissions},
        priority=r.priority,
        scope_capability=ScopeCapability(
            multi_branch=r.can_manage_multiple_branches,
            multi_enterprise=r.can_manage_multiple_enterprises,
        ),
        display_name=r.display_name,
        description=r.description or "",
        category=r.category,
        is_protected=r.is_protected,
        is_active=r.is_active,
    )


def _apply_entity(row: Role, role: RoleEntity) -> None:
    """Copy entity fields onto the ORM row and sync its permission keys."""
    row.name = role.name
    row.display_name = role.display_name
    row.description = role.description or None
    row.category = role.category.value
    row.priority = role.priority
    row.can_manage_multiple_branches = role.scope_capability.multi_branch
    row.can_manage_multiple_enterprises = role.scope_capability.multi_enterprise
    row.is_protected = role.is_protected
    row.is_active = role.is_active
    current = {rp.permission_key for rp in row.permissions}
    for rp in [rp for rp in row.permissions if rp.permission_key not in role.permissions]:
        row.permissions.remove(rp)
    for key in sorted(role.permissions - current):
        row.permissions.append(RolePermission(permission_key=key))


class RoleRepository(BaseRepository[Role]):
    """Role store. Implements IRoleRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Role)

    def _duplicate_error(self, obj: Role) -> Exception:
        return DuplicateRoleNameException(obj.name)

    async def get_by_name(self, name: str) -> RoleEntity | None:
        row = await self.get_one_by(name=name)
        return _role_to_entity(row) if row else None

    async def list_all(self, *, include_inactive: bool = True) -> list[RoleEntity]:
        rows = await self.get_all(Role.priority, Role.name)
        return [_role_to_entity(r) for r in rows if include_inactive or r.is_active]

    async def create(self, role: RoleEntity) -> RoleEntity:
        row = Role(permissions=[])
        _apply_entity(row, role)
        created = await self.insert(row)
        return _role_to_entity(created)

    async def update(self, role: RoleEntity, *, previous_name: str | None = None) -> RoleEntity:
        lookup = previous_name or role.name
        row = await self.get_one_by(name=lookup)
        if row is None:
            raise ResourceNotFoundException("role", lookup)
        _apply_entity(row, role)
        saved = await self.save(row)
        return _role_to_entity(saved)

    async def delete(self, name: str) -> bool:
        row = await self.get_one_by(name=name)
        if row is None:
            return False
        await self.remove(row)
        return True
