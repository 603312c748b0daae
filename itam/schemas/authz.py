"""Authorization API schemas: policy check and the caller's effective permissions."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class PolicyPayload(BaseModel):
    """Policy to evaluate. single and scoped_single take exactly one key."""

    kind: Literal["single", "any_of", "all_of", "scoped_single"]
    keys: list[str] = Field(..., max_length=50)
    branch_field: str | None = None
    enterprise_field: str | None = None


class AuthzCheckRequest(BaseModel):
    """Request body for POST /authz/check.

    target is the operation payload the scope fields are read from: one
    object, or a list searched in order (first non-empty value wins).
    """

    policy: PolicyPayload
    target: dict[str, Any] | list[dict[str, Any]] | None = None


class DecisionResponse(BaseModel):
    """Granted or Denied, discriminated by granted."""

    granted: bool
    policy: dict[str, Any] | None = None
    scope: dict[str, Any] | None = None
    reason: str | None = None
    required: list[str] = Field(default_factory=list)
    denied_scope: dict[str, Any] | None = None


class MyPermissionsResponse(BaseModel):
    """Effective permissions of the current principal (UI mirror)."""

    principal_id: str
    role_name: str | None
    is_super_admin: bool
    permissions: list[str]
    accessible_branches: list[str]
    accessible_enterprises: list[str]
