"""Role API schemas."""

from pydantic import BaseModel, Field

from itam.domain.entities.role import RoleEntity
from itam.domain.enums import RoleCategory


class RoleCreate(BaseModel):
    """Request body for creating a role."""

    name: str = Field(..., min_length=3, max_length=50, examples=["asset_auditor"])
    display_name: str = Field(default="", max_length=100)
    description: str = Field(default="", max_length=500)
    priority: int = Field(default=100, ge=1, le=1000)
    permissions: list[str] = Field(default_factory=list, max_length=200)
    multi_branch: bool = False
    multi_enterprise: bool = False


class RoleUpdate(BaseModel):
    """Request body for updating a role (partial). name renames the role."""

    name: str | None = Field(default=None, min_length=3, max_length=50)
    display_name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    priority: int | None = Field(default=None, ge=1, le=1000)
    multi_branch: bool | None = None
    multi_enterprise: bool | None = None
    is_active: bool | None = None


class RolePermissionsChange(BaseModel):
    """Request body for adding or removing permission keys on a role."""

    permissions: list[str] = Field(..., min_length=1, max_length=200)


class RoleResponse(BaseModel):
    """Role list/detail response."""

    name: str
    display_name: str
    description: str
    category: RoleCategory
    priority: int
    permissions: list[str]
    multi_branch: bool
    multi_enterprise: bool
    is_protected: bool
    is_active: bool

    @classmethod
    def from_entity(cls, role: RoleEntity) -> "RoleResponse":
        return cls(
            name=role.name,
            display_name=role.display_name,
            description=role.description,
            category=role.category,
            priority=role.priority,
            permissions=sorted(role.permissions),
            multi_branch=role.scope_capability.multi_branch,
            multi_enterprise=role.scope_capability.multi_enterprise,
            is_protected=role.is_protected,
            is_active=role.is_active,
        )
