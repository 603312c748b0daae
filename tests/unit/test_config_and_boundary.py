"""Unit tests for settings validation and the HTTP boundary helpers."""

from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from itam.api.v1.dependencies import get_current_principal, require_scoped_permission
from itam.application.services.principal_service import PrincipalSnapshotService
from itam.core.config import Settings
from itam.core.exception_handlers import status_for
from itam.domain.entities.principal import Principal
from itam.domain.entities.role import RoleEntity
from itam.domain.exceptions import (
    DuplicateRoleNameException,
    InsufficientPermissionException,
    ItamException,
    NotAuthenticatedException,
    ProtectedRoleViolationException,
    ResourceNotFoundException,
    ScopeDeniedException,
    SqlNotConfiguredException,
    ValidationException,
)
from itam.infrastructure.persistence.repositories import InMemoryRoleRepository


class TestSettings:
    def test_memory_backend_needs_no_url(self) -> None:
        settings = Settings(database_backend="memory", _env_file=None)
        assert settings.scope_branch_field == "branch_id"
        assert settings.seed_on_startup is True

    def test_sql_backend_requires_database_url(self) -> None:
        with pytest.raises(ValidationError, match="DATABASE_URL is required"):
            Settings(database_backend="sql", database_url="", _env_file=None)

    def test_sql_backend_with_url(self) -> None:
        settings = Settings(
            database_backend="sql",
            database_url="sqlite+aiosqlite:///./itam.db",
            _env_file=None,
        )
        assert settings.database_backend == "sql"

    def test_unknown_backend_rejected(self) -> None:
        with pytest.raises(ValidationError, match="must be 'memory' or 'sql'"):
            Settings(database_backend="mongo", _env_file=None)

    def test_scope_field_names_must_be_non_empty(self) -> None:
        with pytest.raises(ValidationError):
            Settings(database_backend="memory", scope_branch_field="", _env_file=None)


def test_status_for_denial_taxonomy() -> None:
    assert status_for(NotAuthenticatedException()) == 401
    assert status_for(InsufficientPermissionException(("asset:read",))) == 403
    assert status_for(ScopeDeniedException("asset:read", {"dimension": "branch"})) == 403
    assert status_for(ProtectedRoleViolationException("user", "delete")) == 403
    assert status_for(ResourceNotFoundException("role", "x")) == 404
    assert status_for(DuplicateRoleNameException("x")) == 409
    assert status_for(ValidationException("bad")) == 400
    assert status_for(SqlNotConfiguredException()) == 503
    assert status_for(ItamException("unmapped")) == 400


async def test_get_current_principal_returns_attached_principal(
    role_repo: InMemoryRoleRepository,
) -> None:
    principal = Principal(id="p1", permissions=frozenset({"asset:read"}))
    request = SimpleNamespace(state=SimpleNamespace(principal=principal))
    snapshots = PrincipalSnapshotService(role_repo)
    assert await get_current_principal(request, snapshots) is principal  # type: ignore[arg-type]


async def test_get_current_principal_snapshots_identity_from_role(
    role_repo: InMemoryRoleRepository,
) -> None:
    """An identity mapping from the auth layer gets its role's permission set."""
    await role_repo.create(RoleEntity(name="branch_admin", permissions={"asset:update"}))
    identity = {"id": "u-7", "role": "branch_admin", "assigned_branches": ["b1"]}
    request = SimpleNamespace(state=SimpleNamespace(principal=identity))

    principal = await get_current_principal(request, PrincipalSnapshotService(role_repo))  # type: ignore[arg-type]

    assert principal is not None
    assert principal.id == "u-7"
    assert principal.role_name == "branch_admin"
    assert principal.permissions == frozenset({"asset:update"})
    assert principal.assigned_branches == frozenset({"b1"})
    assert request.state.principal is principal


async def test_get_current_principal_unknown_role_is_unauthenticated(
    role_repo: InMemoryRoleRepository,
) -> None:
    request = SimpleNamespace(state=SimpleNamespace(principal={"id": "u-7", "role": "ghost"}))
    assert await get_current_principal(request, PrincipalSnapshotService(role_repo)) is None  # type: ignore[arg-type]


async def test_get_current_principal_ignores_missing_or_foreign_objects(
    role_repo: InMemoryRoleRepository,
) -> None:
    snapshots = PrincipalSnapshotService(role_repo)
    assert await get_current_principal(SimpleNamespace(state=SimpleNamespace()), snapshots) is None  # type: ignore[arg-type]
    no_role = SimpleNamespace(state=SimpleNamespace(principal={"id": "p1"}))
    assert await get_current_principal(no_role, snapshots) is None  # type: ignore[arg-type]
    foreign = SimpleNamespace(state=SimpleNamespace(principal="p1"))
    assert await get_current_principal(foreign, snapshots) is None  # type: ignore[arg-type]


def test_require_scoped_permission_rejects_malformed_key() -> None:
    with pytest.raises(ValidationException):
        require_scoped_permission("asset")
