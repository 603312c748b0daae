"""Domain value objects and shared value types."""

from itam.domain.value_objects.core import (
    WILDCARD,
    PermissionKey,
    ResourceScope,
    ScopeCapability,
    normalize_key,
)

__all__ = [
    "WILDCARD",
    "PermissionKey",
    "ResourceScope",
    "ScopeCapability",
    "normalize_key",
]
