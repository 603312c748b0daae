"""Domain exceptions for the authorization core.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. The HTTP
boundary maps them to responses in exception handlers.
"""

from typing import Any


class ItamException(Exception):
    """Base exception for all authorization core errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. The presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. required permissions).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(ItamException):
    """Raised when input validation fails (e.g. malformed permission key)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class NotAuthenticatedException(ItamException):
    """Raised when no authenticated principal is attached to the operation."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, "NOT_AUTHENTICATED")


class InsufficientPermissionException(ItamException):
    """Raised when the principal's permission set does not satisfy the policy.

    Never retryable: the same principal grants cannot produce a different outcome.
    """

    def __init__(
        self,
        required: tuple[str, ...] | list[str],
        policy: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize with the permission keys the caller must hold.

        Args:
            required: Permission key(s) needed (for AllOf, only the missing ones).
            policy: Optional policy kind ('single', 'any_of', 'all_of', 'scoped_single').
            message: Human-readable message; built from required when omitted.
        """
        required = tuple(required)
        if message is None:
            if len(required) == 1:
                message = f"Permission '{required[0]}' required"
            elif policy == "any_of":
                message = f"Insufficient permissions. Required: {' | '.join(required)}"
            else:
                message = f"Insufficient permissions. Required all of: {', '.join(required)}"
        details: dict[str, Any] = {"required": list(required)}
        if policy:
            details["policy"] = policy
        super().__init__(message, "PERMISSION_DENIED", details)


class ScopeDeniedException(ItamException):
    """Raised when the permission is held but the resource's branch/enterprise is unreachable."""

    def __init__(
        self,
        required: str,
        denied_scope: dict[str, Any],
        message: str = "Access to this resource scope is not allowed",
    ) -> None:
        """Initialize with the permission that was held and the scope that failed.

        Args:
            required: Permission key that was granted before the scope check.
            denied_scope: e.g. {'dimension': 'branch', 'branch_id': 'b2'}.
            message: Human-readable message.
        """
        super().__init__(
            message,
            "SCOPE_DENIED",
            {"required": [required], "denied_scope": denied_scope},
        )


class DuplicatePermissionKeyException(ItamException):
    """Raised when registering a permission whose key already exists in the catalog."""

    def __init__(self, key: str) -> None:
        super().__init__(
            f"Permission with key '{key}' already exists",
            "DUPLICATE_KEY",
            {"key": key},
        )


class DuplicateRoleNameException(ItamException):
    """Raised when creating or renaming a role to a name that is taken."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Role with name '{name}' already exists",
            "DUPLICATE_ROLE_NAME",
            {"name": name},
        )


class ProtectedRoleViolationException(ItamException):
    """Raised when deleting, renaming or deactivating a built-in (protected) role."""

    def __init__(self, name: str, operation: str) -> None:
        """Initialize with role name and the rejected operation.

        Args:
            name: Protected role name (e.g. 'super_admin').
            operation: 'delete', 'rename' or 'deactivate'.
        """
        super().__init__(
            f"Role '{name}' is protected and cannot be {operation}d",
            "PROTECTED_ROLE",
            {"name": name, "operation": operation},
        )


class ResourceNotFoundException(ItamException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'role', 'permission').
            resource_id: The identifier that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class SqlNotConfiguredException(ItamException):
    """Raised when an operation requires the SQL store but it is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
