"""Unit tests for the scope access evaluator (branch/enterprise reachability)."""

from itam.application.services.scope_evaluator import (
    ALL_SCOPES,
    accessible_branches,
    accessible_enterprises,
    check_scope_access,
    denied_dimension,
)
from itam.domain.entities.principal import Principal
from itam.domain.enums import ScopeDimension
from itam.domain.value_objects.core import ResourceScope


def _principal(permissions=("asset:update",), branches=(), enterprises=()) -> Principal:
    return Principal(
        id="p1",
        permissions=frozenset(permissions),
        assigned_branches=frozenset(branches),
        assigned_enterprises=frozenset(enterprises),
    )


def test_branch_in_assignment_is_reachable() -> None:
    principal = _principal(branches=["b1", "b2"])
    assert check_scope_access(principal, ResourceScope(branch_id="b1"))
    assert denied_dimension(principal, ResourceScope(branch_id="b2")) is None


def test_branch_outside_assignment_is_denied() -> None:
    principal = _principal(branches=["b1"])
    assert denied_dimension(principal, ResourceScope(branch_id="b2")) == ScopeDimension.BRANCH
    assert not check_scope_access(principal, ResourceScope(branch_id="b2"))


def test_enterprise_outside_assignment_is_denied() -> None:
    principal = _principal(enterprises=["e1"])
    assert (
        denied_dimension(principal, ResourceScope(enterprise_id="e2"))
        == ScopeDimension.ENTERPRISE
    )


def test_enterprise_is_checked_before_branch() -> None:
    principal = _principal(branches=["b1"], enterprises=["e1"])
    scope = ResourceScope(branch_id="b9", enterprise_id="e9")
    assert denied_dimension(principal, scope) == ScopeDimension.ENTERPRISE


def test_wildcard_principal_reaches_every_scope() -> None:
    principal = _principal(permissions=["*"], branches=["b1"], enterprises=["e1"])
    assert check_scope_access(principal, ResourceScope(branch_id="b9", enterprise_id="e9"))


def test_principal_without_assignments_is_unrestricted() -> None:
    """No assignment for a dimension means no restriction on it (permissive default)."""
    principal = _principal()
    assert check_scope_access(principal, ResourceScope(branch_id="b9", enterprise_id="e9"))
    only_enterprise = _principal(enterprises=["e1"])
    assert check_scope_access(only_enterprise, ResourceScope(branch_id="b9", enterprise_id="e1"))


def test_resource_without_scope_skips_both_dimensions() -> None:
    principal = _principal(branches=["b1"], enterprises=["e1"])
    assert check_scope_access(principal, ResourceScope())
    assert check_scope_access(principal, ResourceScope(enterprise_id="e1"))


def test_identifiers_compare_as_strings() -> None:
    principal = Principal(id="p1", permissions=frozenset({"asset:read"}), assigned_branches=[7])  # type: ignore[arg-type]
    assert check_scope_access(principal, ResourceScope(branch_id=7))  # type: ignore[arg-type]
    assert not check_scope_access(principal, ResourceScope(branch_id=8))  # type: ignore[arg-type]


def test_missing_principal_is_denied() -> None:
    assert denied_dimension(None, ResourceScope(enterprise_id="e1")) == ScopeDimension.ENTERPRISE
    assert denied_dimension(None, ResourceScope(branch_id="b1")) == ScopeDimension.BRANCH
    assert not check_scope_access(None, ResourceScope())


def test_accessible_scopes() -> None:
    principal = _principal(branches=["b1", "b2"], enterprises=["e1"])
    assert accessible_branches(principal) == frozenset({"b1", "b2"})
    assert accessible_enterprises(principal) == frozenset({"e1"})
    assert accessible_branches(None) == frozenset()


def test_accessible_scopes_wildcard_returns_sentinel() -> None:
    principal = _principal(permissions=["*"])
    assert accessible_branches(principal) is ALL_SCOPES
    assert accessible_enterprises(principal) is ALL_SCOPES
    assert "any-branch" in accessible_branches(principal)
