"""Pydantic request/response schemas for the API."""

from itam.schemas.authz import (
    AuthzCheckRequest,
    DecisionResponse,
    MyPermissionsResponse,
    PolicyPayload,
)
from itam.schemas.permission import PermissionCreate, PermissionResponse
from itam.schemas.role import RoleCreate, RolePermissionsChange, RoleResponse, RoleUpdate

__all__ = [
    "AuthzCheckRequest",
    "DecisionResponse",
    "MyPermissionsResponse",
    "PermissionCreate",
    "PermissionResponse",
    "PolicyPayload",
    "RoleCreate",
    "RolePermissionsChange",
    "RoleResponse",
    "RoleUpdate",
]
