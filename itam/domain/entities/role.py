"""Role domain entity.

A named bundle of permission keys with a display priority and a
scope-capability descriptor.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from itam.domain.enums import RoleCategory
from itam.domain.exceptions import ProtectedRoleViolationException, ValidationException
from itam.domain.value_objects.core import WILDCARD, PermissionKey, ScopeCapability

_ROLE_NAME_RE = re.compile(r"^[a-z0-9_]{3,50}$")


def normalize_role_name(name: str) -> str:
    """Lowercase and validate a role name. Raises ValidationException if invalid."""
    value = (name or "").strip().lower()
    if not _ROLE_NAME_RE.match(value):
        raise ValidationException(
            "Role name must be 3-50 characters, lowercase alphanumeric with "
            "optional underscores (e.g. 'branch_admin')",
            field="name",
        )
    return value


def normalize_permission_keys(keys: Iterable[str]) -> set[str]:
    """Parse each key and return the canonical set. Raises ValidationException on a bad key."""
    if isinstance(keys, str):
        keys = [keys]
    normalized: set[str] = set()
    for raw in keys:
        try:
            normalized.add(PermissionKey.parse(raw).value)
        except ValueError as exc:
            raise ValidationException(str(exc), field="permissions") from exc
    return normalized


@dataclass
class RoleEntity:
    """Domain entity for a role.

    Permission keys form a set: duplicates collapse and order is
    irrelevant. Protected (built-in) roles cannot be renamed, deleted or
    deactivated; their permission set and details remain editable.
    """

    name: str
    permissions: set[str] = field(default_factory=set)
    priority: int = 100
    scope_capability: ScopeCapability = field(default_factory=ScopeCapability)
    display_name: str = ""
    description: str = ""
    category: RoleCategory = RoleCategory.CUSTOM
    is_protected: bool = False
    is_active: bool = True

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Normalize name and permission keys. Raises ValidationException if invalid."""
        self.name = normalize_role_name(self.name)
        self.permissions = normalize_permission_keys(self.permissions)
        if not isinstance(self.priority, int) or not 1 <= self.priority <= 1000:
            raise ValidationException("Role priority must be an integer in 1-1000", field="priority")
        self.category = RoleCategory(self.category)
        if not self.display_name:
            self.display_name = self.name.replace("_", " ").title()

    def add_permissions(self, keys: Iterable[str]) -> set[str]:
        """Union keys into the role. Returns the keys that were newly added."""
        incoming = normalize_permission_keys(keys)
        added = incoming - self.permissions
        self.permissions |= incoming
        return added

    def remove_permissions(self, keys: Iterable[str]) -> set[str]:
        """Remove keys from the role; absent keys are ignored. Returns the keys removed."""
        outgoing = normalize_permission_keys(keys)
        removed = outgoing & self.permissions
        self.permissions -= outgoing
        return removed

    def explicit_permissions(self) -> set[str]:
        """Permission keys excluding the wildcard."""
        return {key for key in self.permissions if key != WILDCARD}

    def rename(self, new_name: str) -> None:
        """Change the role name.

        Raises:
            ProtectedRoleViolationException: If the role is protected.
            ValidationException: If new_name is invalid.
        """
        if self.is_protected:
            raise ProtectedRoleViolationException(self.name, "rename")
        self.name = normalize_role_name(new_name)

    def ensure_deletable(self) -> None:
        """Raise ProtectedRoleViolationException if the role is protected."""
        if self.is_protected:
            raise ProtectedRoleViolationException(self.name, "delete")

    def deactivate(self) -> None:
        """Mark the role inactive. Protected roles stay active.

        Raises:
            ProtectedRoleViolationException: If the role is protected.
        """
        if self.is_protected:
            raise ProtectedRoleViolationException(self.name, "deactivate")
        self.is_active = False
