"""Tests for domain exceptions (error_code, message, details)."""

from itam.domain.exceptions import (
    DuplicatePermissionKeyException,
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


def test_itam_exception_default_error_code() -> None:
    """Base ItamException uses class name as error_code when not provided."""
    exc = ItamException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "ItamException"
    assert exc.details == {}
    assert exc.to_dict() == {
        "error": "ItamException",
        "message": "Something failed",
        "details": {},
    }


def test_validation_exception() -> None:
    exc = ValidationException("Invalid key", field="key")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "key"}
    assert ValidationException("Invalid").details == {}


def test_not_authenticated_exception() -> None:
    exc = NotAuthenticatedException()
    assert exc.error_code == "NOT_AUTHENTICATED"
    assert exc.message == "Authentication required"


def test_insufficient_permission_single_key_message() -> None:
    exc = InsufficientPermissionException(("asset:delete",), policy="single")
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.message == "Permission 'asset:delete' required"
    assert exc.details == {"required": ["asset:delete"], "policy": "single"}


def test_insufficient_permission_any_of_message() -> None:
    exc = InsufficientPermissionException(["report:view", "report:export"], policy="any_of")
    assert exc.message == "Insufficient permissions. Required: report:view | report:export"


def test_insufficient_permission_all_of_message() -> None:
    exc = InsufficientPermissionException(["system:admin", "audit:export"], policy="all_of")
    assert exc.message == "Insufficient permissions. Required all of: system:admin, audit:export"
    assert exc.details["required"] == ["system:admin", "audit:export"]


def test_scope_denied_exception() -> None:
    denied = {"dimension": "branch", "branch_id": "b2", "enterprise_id": None}
    exc = ScopeDeniedException("asset:update", denied)
    assert exc.error_code == "SCOPE_DENIED"
    assert exc.details == {"required": ["asset:update"], "denied_scope": denied}


def test_duplicate_exceptions() -> None:
    key_exc = DuplicatePermissionKeyException("asset:read")
    assert key_exc.error_code == "DUPLICATE_KEY"
    assert key_exc.details == {"key": "asset:read"}
    name_exc = DuplicateRoleNameException("auditor")
    assert name_exc.error_code == "DUPLICATE_ROLE_NAME"
    assert "auditor" in name_exc.message


def test_protected_role_violation_messages() -> None:
    delete_exc = ProtectedRoleViolationException("super_admin", "delete")
    assert delete_exc.error_code == "PROTECTED_ROLE"
    assert delete_exc.message == "Role 'super_admin' is protected and cannot be deleted"
    rename_exc = ProtectedRoleViolationException("user", "rename")
    assert rename_exc.message.endswith("cannot be renamed")
    assert rename_exc.details == {"name": "user", "operation": "rename"}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("role", "auditor")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "role", "resource_id": "auditor"}


def test_sql_not_configured_exception() -> None:
    assert SqlNotConfiguredException().error_code == "SERVICE_UNAVAILABLE"
