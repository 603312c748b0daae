"""Principal snapshot service: denormalize a role's permissions onto a principal.

Runs when a role is assigned or at login. Decisions never walk roles; a
principal keeps the snapshot until the caller re-snapshots it.
"""

from __future__ import annotations

from collections.abc import Iterable

from itam.application.interfaces.repositories import IRoleRepository
from itam.domain.entities.principal import Principal
from itam.domain.exceptions import ResourceNotFoundException
from itam.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class PrincipalSnapshotService:
    """Build Principal snapshots from stored roles."""

    def __init__(self, role_repo: IRoleRepository) -> None:
        self._role_repo = role_repo

    async def snapshot(
        self,
        principal_id: str,
        role_name: str,
        assigned_branches: Iterable[object] | None = None,
        assigned_enterprises: Iterable[object] | None = None,
    ) -> Principal:
        """Return a principal carrying the role's current permission set.

        Raises:
            ResourceNotFoundException: If the role is missing or inactive.
        """
        name = (role_name or "").strip().lower()
        role = await self._role_repo.get_by_name(name)
        if role is None or not role.is_active:
            raise ResourceNotFoundException("role", name)
        principal = Principal.from_role(
            principal_id,
            role,
            assigned_branches=assigned_branches,
            assigned_enterprises=assigned_enterprises,
        )
        logger.debug(
            "Snapshotted %d permission(s) from role %s onto principal %s",
            len(principal.permissions),
            role.name,
            principal_id,
        )
        return principal

    async def refresh(self, principal: Principal) -> Principal:
        """Re-snapshot an existing principal from its role's current state.

        Raises:
            ResourceNotFoundException: If the principal has no role or the role is gone.
        """
        if not principal.role_name:
            raise ResourceNotFoundException("role", "")
        return await self.snapshot(
            principal.id,
            principal.role_name,
            assigned_branches=principal.assigned_branches,
            assigned_enterprises=principal.assigned_enterprises,
        )
