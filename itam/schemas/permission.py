"""Permission API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from itam.domain.enums import PermissionCategory


class PermissionCreate(BaseModel):
    """Request body for registering a catalog permission."""

    key: str = Field(..., min_length=3, max_length=100, examples=["asset:audit"])
    category: PermissionCategory
    description: str = Field(default="", max_length=500)
    is_critical: bool = False


class PermissionResponse(BaseModel):
    """Permission list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    key: str
    category: PermissionCategory
    description: str
    is_critical: bool
    is_active: bool
