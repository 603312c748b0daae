"""Current principal API: effective permissions and reachable scopes (UI mirror)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from itam.api.v1.dependencies import get_permission_catalog, require_authenticated
from itam.application.services.permission_catalog import PermissionCatalogService
from itam.application.services.permission_resolver import is_wildcard_set
from itam.application.services.scope_evaluator import (
    ALL_SCOPES,
    accessible_branches,
    accessible_enterprises,
)
from itam.domain.entities.principal import Principal
from itam.domain.value_objects.core import WILDCARD
from itam.schemas.authz import MyPermissionsResponse

router = APIRouter()


def _scope_list(scopes) -> list[str]:
    if scopes is ALL_SCOPES:
        return [WILDCARD]
    return sorted(scopes)


@router.get("/permissions", response_model=MyPermissionsResponse)
async def get_my_permissions(
    principal: Annotated[Principal, Depends(require_authenticated)],
    catalog: Annotated[PermissionCatalogService, Depends(get_permission_catalog)],
):
    """Effective permission keys (wildcard expanded against the catalog) and scopes.

    The UI hides controls with this; the backend re-checks every operation.
    """
    is_super_admin = is_wildcard_set(principal.permissions)
    if is_super_admin:
        permissions = await catalog.expand(principal.permissions)
    else:
        permissions = sorted(principal.permissions)
    return MyPermissionsResponse(
        principal_id=principal.id,
        role_name=principal.role_name,
        is_super_admin=is_super_admin,
        permissions=permissions,
        accessible_branches=_scope_list(accessible_branches(principal)),
        accessible_enterprises=_scope_list(accessible_enterprises(principal)),
    )
