"""Authorization policies: the rule a single operation must satisfy.

Four kinds: Single(key), AnyOf(keys), AllOf(keys), and
ScopedSingle(key, branch_field, enterprise_field). Keys are parsed and
normalized on construction so evaluation only compares strings.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from itam.domain.exceptions import ValidationException
from itam.domain.value_objects.core import PermissionKey

DEFAULT_BRANCH_FIELD = "branch_id"
DEFAULT_ENTERPRISE_FIELD = "enterprise_id"


def _parse_key(raw: str) -> str:
    try:
        return PermissionKey.parse(raw).value
    except ValueError as exc:
        raise ValidationException(str(exc), field="key") from exc


def _parse_keys(raw: Iterable[str]) -> tuple[str, ...]:
    if isinstance(raw, str):
        raw = [raw]
    keys: list[str] = []
    for item in raw:
        key = _parse_key(item)
        if key not in keys:
            keys.append(key)
    return tuple(keys)


@dataclass(frozen=True)
class Single:
    """Principal must hold exactly this permission (or the wildcard)."""

    key: str
    kind: ClassVar[str] = "single"

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", _parse_key(self.key))

    @property
    def required(self) -> tuple[str, ...]:
        return (self.key,)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "keys": list(self.required)}


@dataclass(frozen=True)
class AnyOf:
    """Principal must hold at least one of the keys. No keys never grants."""

    keys: tuple[str, ...]
    kind: ClassVar[str] = "any_of"

    def __post_init__(self) -> None:
        object.__setattr__(self, "keys", _parse_keys(self.keys))

    @property
    def required(self) -> tuple[str, ...]:
        return self.keys

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "keys": list(self.keys)}


@dataclass(frozen=True)
class AllOf:
    """Principal must hold every key. No keys always grants (vacuous truth)."""

    keys: tuple[str, ...]
    kind: ClassVar[str] = "all_of"

    def __post_init__(self) -> None:
        object.__setattr__(self, "keys", _parse_keys(self.keys))

    @property
    def required(self) -> tuple[str, ...]:
        return self.keys

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "keys": list(self.keys)}


@dataclass(frozen=True)
class ScopedSingle:
    """Single permission plus a branch/enterprise reachability check on the target.

    branch_field / enterprise_field name the keys read from the operation
    target (request body, path params, query).
    """

    key: str
    branch_field: str = DEFAULT_BRANCH_FIELD
    enterprise_field: str = DEFAULT_ENTERPRISE_FIELD
    kind: ClassVar[str] = "scoped_single"

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", _parse_key(self.key))
        if not self.branch_field or not self.enterprise_field:
            raise ValidationException("Scope field names must be non-empty", field="branch_field")

    @property
    def required(self) -> tuple[str, ...]:
        return (self.key,)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "keys": [self.key],
            "branch_field": self.branch_field,
            "enterprise_field": self.enterprise_field,
        }


Policy = Single | AnyOf | AllOf | ScopedSingle


def policy_from_dict(data: Mapping[str, Any]) -> Policy:
    """Build a policy from {'kind': ..., 'keys': [...], ...} (API payloads, config).

    Raises:
        ValidationException: If kind is unknown or keys are malformed.
    """
    kind = data.get("kind")
    keys = data.get("keys") or []
    if isinstance(keys, str):
        keys = [keys]
    if kind in (Single.kind, ScopedSingle.kind) and len(keys) != 1:
        raise ValidationException(f"Policy '{kind}' takes exactly one key", field="keys")
    if kind == Single.kind:
        return Single(keys[0])
    if kind == AnyOf.kind:
        return AnyOf(tuple(keys))
    if kind == AllOf.kind:
        return AllOf(tuple(keys))
    if kind == ScopedSingle.kind:
        return ScopedSingle(
            keys[0],
            branch_field=data.get("branch_field") or DEFAULT_BRANCH_FIELD,
            enterprise_field=data.get("enterprise_field") or DEFAULT_ENTERPRISE_FIELD,
        )
    raise ValidationException(
        f"Unknown policy kind {kind!r}; expected one of "
        f"{[Single.kind, AnyOf.kind, AllOf.kind, ScopedSingle.kind]}",
        field="kind",
    )
