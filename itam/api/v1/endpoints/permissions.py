"""Permissions API: catalog listing, grouping, registration and deactivation."""

from typing import Annotated

from fastapi import APIRouter, Depends

from itam.api.v1.dependencies import get_permission_catalog, require_permission
from itam.application.services.permission_catalog import PermissionCatalogService
from itam.domain.entities.permission import PermissionEntity
from itam.schemas.permission import PermissionCreate, PermissionResponse

router = APIRouter()


@router.get("", response_model=list[PermissionResponse])
async def list_permissions(
    catalog: Annotated[PermissionCatalogService, Depends(get_permission_catalog)],
    _: Annotated[object, Depends(require_permission("system:admin"))] = None,
):
    """List active permissions ordered by category, then key."""
    permissions = await catalog.list_active()
    return [PermissionResponse.model_validate(p) for p in permissions]


@router.get("/by-category", response_model=dict[str, list[PermissionResponse]])
async def list_permissions_by_category(
    catalog: Annotated[PermissionCatalogService, Depends(get_permission_catalog)],
    _: Annotated[object, Depends(require_permission("system:admin"))] = None,
):
    """Active permissions grouped by category (admin role-editor sections)."""
    grouped = await catalog.group_by_category()
    return {
        category.value: [PermissionResponse.model_validate(p) for p in permissions]
        for category, permissions in grouped.items()
    }


@router.post("", response_model=PermissionResponse, status_code=201)
async def register_permission(
    body: PermissionCreate,
    catalog: Annotated[PermissionCatalogService, Depends(get_permission_catalog)],
    _: Annotated[object, Depends(require_permission("system:configure"))] = None,
):
    """Add a permission to the catalog. 409 if the key exists."""
    created = await catalog.register(
        PermissionEntity(
            key=body.key,
            category=body.category,
            description=body.description,
            is_critical=body.is_critical,
        )
    )
    return PermissionResponse.model_validate(created)


@router.post("/{key}/deactivate", response_model=PermissionResponse)
async def deactivate_permission(
    key: str,
    catalog: Annotated[PermissionCatalogService, Depends(get_permission_catalog)],
    _: Annotated[object, Depends(require_permission("system:configure"))] = None,
):
    """Hide a permission from listings. Existing principal snapshots keep the grant."""
    updated = await catalog.deactivate(key)
    return PermissionResponse.model_validate(updated)
