"""Principal permission resolver: pure queries over a denormalized permission set.

Single source of truth for "can this principal do X". No role or
catalog lookups happen here; the permission set was snapshotted onto the
principal earlier. Every function is total: bad or missing input yields
False / empty, never an exception.

The wildcard "*" short-circuits every query through is_wildcard_set, so
single, any-of, and all-of checks cannot drift apart.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable

from itam.domain.value_objects.core import WILDCARD, normalize_key


class _AllActions:
    """Sentinel returned by resource_actions for wildcard holders."""

    _instance: _AllActions | None = None

    def __new__(cls) -> _AllActions:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ALL_ACTIONS"

    def __contains__(self, action: object) -> bool:
        return True


ALL_ACTIONS = _AllActions()

PermissionSet = Collection[str] | None


def _normalized(permissions: PermissionSet) -> frozenset[str]:
    if not permissions or isinstance(permissions, str):
        return frozenset()
    return frozenset(normalize_key(p) for p in permissions if isinstance(p, str))


def is_wildcard_set(permissions: PermissionSet) -> bool:
    """True if the set grants everything."""
    return WILDCARD in _normalized(permissions)


def has_permission(permissions: PermissionSet, key: str) -> bool:
    """True iff the set holds the wildcard or exactly key."""
    granted = _normalized(permissions)
    if WILDCARD in granted:
        return True
    if not isinstance(key, str):
        return False
    return normalize_key(key) in granted


def has_any_permission(permissions: PermissionSet, keys: Iterable[str]) -> bool:
    """True iff at least one key is granted. Empty keys -> False."""
    return any(has_permission(permissions, key) for key in keys)


def has_all_permissions(permissions: PermissionSet, keys: Iterable[str]) -> bool:
    """True iff every key is granted. Empty keys -> True (vacuous truth)."""
    return all(has_permission(permissions, key) for key in keys)


def missing_permissions(permissions: PermissionSet, keys: Iterable[str]) -> tuple[str, ...]:
    """Keys not granted by the set, normalized, in input order without repeats."""
    missing: list[str] = []
    for key in keys:
        if has_permission(permissions, key):
            continue
        normalized = normalize_key(key) if isinstance(key, str) else str(key)
        if normalized not in missing:
            missing.append(normalized)
    return tuple(missing)


def resource_actions(permissions: PermissionSet, resource: str) -> frozenset[str] | _AllActions:
    """Actions granted under resource (e.g. 'asset' -> {'read', 'update'}).

    Wildcard holders get ALL_ACTIONS; enumerating concrete actions for them
    requires the permission catalog.
    """
    granted = _normalized(permissions)
    if WILDCARD in granted:
        return ALL_ACTIONS
    if not isinstance(resource, str):
        return frozenset()
    prefix = f"{normalize_key(resource)}:"
    return frozenset(key[len(prefix):] for key in granted if key.startswith(prefix))
