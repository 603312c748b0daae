"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
Repositories speak domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from itam.domain.entities.permission import PermissionEntity
    from itam.domain.entities.role import RoleEntity


# Permission catalog repository interface
class IPermissionRepository(Protocol):
    """Protocol for the permission catalog store (DIP)."""

    async def get_by_key(self, key: str) -> PermissionEntity | None:
        """Return permission by canonical key."""

    async def list_all(self, *, include_inactive: bool = False) -> list[PermissionEntity]:
        """Return permissions ordered by (category, key)."""

    async def create(self, permission: PermissionEntity) -> PermissionEntity:
        """Insert a permission. Raises DuplicatePermissionKeyException if the key exists."""

    async def update(self, permission: PermissionEntity) -> PermissionEntity:
        """Persist flag/description changes. Raises ResourceNotFoundException if missing."""


# Role repository interface
class IRoleRepository(Protocol):
    """Protocol for the role store (DIP)."""

    async def get_by_name(self, name: str) -> RoleEntity | None:
        """Return role by name."""

    async def list_all(self, *, include_inactive: bool = True) -> list[RoleEntity]:
        """Return roles ordered by (priority, name)."""

    async def create(self, role: RoleEntity) -> RoleEntity:
        """Insert a role with its permission keys. Raises DuplicateRoleNameException if taken."""

    async def update(self, role: RoleEntity, *, previous_name: str | None = None) -> RoleEntity:
        """Replace the stored role (matched by previous_name, else role.name).

        Raises:
            ResourceNotFoundException: If no role is stored under that name.
            DuplicateRoleNameException: If a rename collides with another role.
        """

    async def delete(self, name: str) -> bool:
        """Remove a role. Returns False when nothing was stored under name."""
