"""Domain enumerations for the authorization core.

Enums represent fixed sets of domain values (permission categories,
decision states, denial reasons).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class PermissionCategory(_ValuesMixin, str, Enum):
    """Grouping label for catalog permissions (admin UI sections)."""

    USER_MANAGEMENT = "user_management"
    ASSET_MANAGEMENT = "asset_management"
    REPORTING = "reporting"
    ORGANIZATION = "organization"
    BRANCH = "branch"
    SYSTEM_ADMIN = "system_admin"
    AUDIT = "audit"


class RoleCategory(_ValuesMixin, str, Enum):
    """Built-in roles are 'system'; administrator-created roles are 'custom'."""

    SYSTEM = "system"
    CUSTOM = "custom"


class DecisionState(_ValuesMixin, str, Enum):
    """States of the per-operation authorization gate.

    UNAUTHENTICATED -> PERMISSION_CHECKED -> SCOPE_CHECKED -> GRANTED;
    DENIED is reachable from any state after UNAUTHENTICATED.
    """

    UNAUTHENTICATED = "unauthenticated"
    PERMISSION_CHECKED = "permission_checked"
    SCOPE_CHECKED = "scope_checked"
    GRANTED = "granted"
    DENIED = "denied"


class DenialReason(_ValuesMixin, str, Enum):
    """Why the gate rejected an operation. Boundary layers map these to transport codes."""

    NOT_AUTHENTICATED = "not_authenticated"
    INSUFFICIENT_PERMISSION = "insufficient_permission"
    SCOPE_DENIED = "scope_denied"


class ScopeDimension(_ValuesMixin, str, Enum):
    """Scope axis that restricted access to a resource."""

    ENTERPRISE = "enterprise"
    BRANCH = "branch"
