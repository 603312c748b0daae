"""Scope access evaluator: may a principal act on a resource in a given branch/enterprise.

Orthogonal to permission checks; an operation needing both runs both.

Rules, in order:
1. Wildcard principals reach every scope.
2. Resource enterprise set and principal has enterprises assigned:
   the enterprise must be one of them.
3. Resource branch set and principal has branches assigned:
   the branch must be one of them.
4. A principal with no assignments for a dimension is unrestricted on it.
   This permissive default is intentional (enterprise admins without a
   branch restriction) and requires product sign-off to change.
5. Otherwise access is granted.
A resource without a branch or enterprise skips that dimension.
"""

from __future__ import annotations

from itam.application.services.permission_resolver import is_wildcard_set
from itam.domain.entities.principal import Principal
from itam.domain.enums import ScopeDimension
from itam.domain.value_objects.core import ResourceScope


class _AllScopes:
    """Sentinel for wildcard principals: every branch and enterprise is accessible."""

    _instance: _AllScopes | None = None

    def __new__(cls) -> _AllScopes:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ALL_SCOPES"

    def __contains__(self, scope_id: object) -> bool:
        return True


ALL_SCOPES = _AllScopes()


def denied_dimension(principal: Principal | None, scope: ResourceScope) -> ScopeDimension | None:
    """Return the first dimension that blocks access, or None when reachable.

    A missing principal is blocked on whichever dimension the resource
    carries (enterprise first); with an empty scope it is blocked on branch.
    """
    if principal is None:
        if scope.enterprise_id is not None:
            return ScopeDimension.ENTERPRISE
        return ScopeDimension.BRANCH
    if is_wildcard_set(principal.permissions):
        return None
    if scope.enterprise_id is not None and principal.assigned_enterprises:
        if scope.enterprise_id not in principal.assigned_enterprises:
            return ScopeDimension.ENTERPRISE
    if scope.branch_id is not None and principal.assigned_branches:
        if scope.branch_id not in principal.assigned_branches:
            return ScopeDimension.BRANCH
    return None


def check_scope_access(principal: Principal | None, scope: ResourceScope) -> bool:
    """True if the principal may act on a resource located at scope."""
    return denied_dimension(principal, scope) is None


def accessible_branches(principal: Principal | None) -> frozenset[str] | _AllScopes:
    """Branch ids the principal is assigned to, or ALL_SCOPES for wildcard holders."""
    if principal is None:
        return frozenset()
    if is_wildcard_set(principal.permissions):
        return ALL_SCOPES
    return principal.assigned_branches


def accessible_enterprises(principal: Principal | None) -> frozenset[str] | _AllScopes:
    """Enterprise ids the principal is assigned to, or ALL_SCOPES for wildcard holders."""
    if principal is None:
        return frozenset()
    if is_wildcard_set(principal.permissions):
        return ALL_SCOPES
    return principal.assigned_enterprises
