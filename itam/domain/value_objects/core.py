"""Domain value objects for the authorization core.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass
from typing import Any

WILDCARD = "*"
_KEY_SEP = ":"

# One segment of resource:action, lowercase alphanumeric with underscores (e.g. change_password).
_SEGMENT_RE = re.compile(r"^[a-z0-9_]+$")


def normalize_key(value: str) -> str:
    """Lowercase and strip a raw permission key. Does not validate shape."""
    return value.strip().lower()


@dataclass(frozen=True)
class PermissionKey:
    """Value object for a permission identifier (resource:action or the wildcard).

    Parsed once at the boundary so decision logic compares normalized
    strings instead of re-splitting them.
    """

    resource: str
    action: str

    def __post_init__(self) -> None:
        """Validate segments.

        Raises:
            ValueError: If a segment is empty or not lowercase alphanumeric/underscore,
                or if only one side is the wildcard.
        """
        if self.resource == WILDCARD or self.action == WILDCARD:
            if self.resource != self.action:
                raise ValueError(
                    "Partial wildcards are not supported; use '*' for all permissions"
                )
            return
        for field_name, segment in (("resource", self.resource), ("action", self.action)):
            if not segment:
                raise ValueError(f"Permission {field_name} must be a non-empty string")
            if not _SEGMENT_RE.match(segment):
                raise ValueError(
                    f"Permission {field_name} must be lowercase alphanumeric with "
                    f"optional underscores (got {segment!r})"
                )

    @classmethod
    def parse(cls, raw: str) -> "PermissionKey":
        """Parse 'resource:action' or '*' (case-insensitive, surrounding whitespace ignored).

        Raises:
            ValueError: If raw is not a string or not of the form resource:action.
        """
        if not isinstance(raw, str):
            raise ValueError("Permission key must be a string")
        value = normalize_key(raw)
        if value == WILDCARD:
            return cls(WILDCARD, WILDCARD)
        parts = value.split(_KEY_SEP)
        if len(parts) != 2:
            raise ValueError(
                f"Permission key must have the form 'resource:action' (got {raw!r})"
            )
        return cls(parts[0], parts[1])

    @property
    def is_wildcard(self) -> bool:
        return self.resource == WILDCARD

    @property
    def value(self) -> str:
        """Canonical string form stored on roles and principals."""
        if self.is_wildcard:
            return WILDCARD
        return f"{self.resource}{_KEY_SEP}{self.action}"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ScopeCapability:
    """Whether holders of a role may span several branches and/or enterprises."""

    multi_branch: bool = False
    multi_enterprise: bool = False


@dataclass(frozen=True)
class ResourceScope:
    """Branch/enterprise location of a target resource. None skips that dimension."""

    branch_id: str | None = None
    enterprise_id: str | None = None

    def __post_init__(self) -> None:
        # Identifiers arrive as ObjectId/UUID/int from callers; compare as strings.
        if self.branch_id is not None:
            object.__setattr__(self, "branch_id", str(self.branch_id))
        if self.enterprise_id is not None:
            object.__setattr__(self, "enterprise_id", str(self.enterprise_id))

    @property
    def is_empty(self) -> bool:
        return self.branch_id is None and self.enterprise_id is None

    def to_dict(self) -> dict[str, Any]:
        return {"branch_id": self.branch_id, "enterprise_id": self.enterprise_id}
