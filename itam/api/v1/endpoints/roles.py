"""Roles API: list, get, create, update, delete, and role permissions.

Built-in (protected) roles may be edited but not renamed, deleted or
deactivated; the service raises ProtectedRoleViolationException (403).
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from itam.api.v1.dependencies import (
    get_role_service,
    require_all_permissions,
    require_permission,
)
from itam.application.services.role_service import RoleService
from itam.domain.value_objects.core import ScopeCapability
from itam.schemas.role import RoleCreate, RolePermissionsChange, RoleResponse, RoleUpdate

router = APIRouter()


@router.get("", response_model=list[RoleResponse])
async def list_roles(
    role_service: Annotated[RoleService, Depends(get_role_service)],
    include_inactive: bool = True,
    _: Annotated[object, Depends(require_permission("system:admin"))] = None,
):
    """List roles ordered by priority (most privileged first), then name."""
    roles = await role_service.list_roles(include_inactive=include_inactive)
    return [RoleResponse.from_entity(r) for r in roles]


@router.get("/{name}", response_model=RoleResponse)
async def get_role(
    name: str,
    role_service: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[object, Depends(require_permission("system:admin"))] = None,
):
    """Get role by name."""
    return RoleResponse.from_entity(await role_service.get(name))


@router.post("", response_model=RoleResponse, status_code=201)
async def create_role(
    body: RoleCreate,
    role_service: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[object, Depends(require_permission("system:configure"))] = None,
):
    """Create a custom role. Permission keys must exist in the catalog (or be '*')."""
    created = await role_service.create(
        body.name,
        body.permissions,
        scope_capability=ScopeCapability(
            multi_branch=body.multi_branch,
            multi_enterprise=body.multi_enterprise,
        ),
        priority=body.priority,
        display_name=body.display_name,
        description=body.description,
    )
    return RoleResponse.from_entity(created)


@router.patch("/{name}", response_model=RoleResponse)
async def update_role(
    name: str,
    body: RoleUpdate,
    role_service: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[object, Depends(require_permission("system:configure"))] = None,
):
    """Update role details; a new name renames the role (not allowed for protected roles)."""
    current = await role_service.get(name)
    if body.name is not None:
        current = await role_service.rename(current.name, body.name)
    scope_capability = None
    if body.multi_branch is not None or body.multi_enterprise is not None:
        scope_capability = ScopeCapability(
            multi_branch=(
                body.multi_branch
                if body.multi_branch is not None
                else current.scope_capability.multi_branch
            ),
            multi_enterprise=(
                body.multi_enterprise
                if body.multi_enterprise is not None
                else current.scope_capability.multi_enterprise
            ),
        )
    updated = await role_service.update_details(
        current.name,
        display_name=body.display_name,
        description=body.description,
        priority=body.priority,
        scope_capability=scope_capability,
        is_active=body.is_active,
    )
    return RoleResponse.from_entity(updated)


@router.delete("/{name}", status_code=204)
async def delete_role(
    name: str,
    role_service: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[
        object, Depends(require_all_permissions("system:admin", "system:configure"))
    ] = None,
):
    """Delete a custom role. Protected roles return 403."""
    await role_service.delete(name)


@router.post("/{name}/permissions", response_model=RoleResponse)
async def add_role_permissions(
    name: str,
    body: RolePermissionsChange,
    role_service: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[object, Depends(require_permission("system:configure"))] = None,
):
    """Add permission keys to a role (idempotent)."""
    updated = await role_service.add_permissions(name, body.permissions)
    return RoleResponse.from_entity(updated)


@router.delete("/{name}/permissions", response_model=RoleResponse)
async def remove_role_permissions(
    name: str,
    body: RolePermissionsChange,
    role_service: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[object, Depends(require_permission("system:configure"))] = None,
):
    """Remove permission keys from a role; keys the role lacks are ignored."""
    updated = await role_service.remove_permissions(name, body.permissions)
    return RoleResponse.from_entity(updated)
