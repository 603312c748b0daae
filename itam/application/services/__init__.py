"""Application services: permission resolution, scope checks, decisions, catalog and roles."""

from itam.application.services.authorization_service import AuthorizationService
from itam.application.services.decision_audit_service import LoggingAuditHook
from itam.application.services.permission_catalog import PermissionCatalogService
from itam.application.services.principal_service import PrincipalSnapshotService
from itam.application.services.role_service import RoleService

__all__ = [
    "AuthorizationService",
    "LoggingAuditHook",
    "PermissionCatalogService",
    "PrincipalSnapshotService",
    "RoleService",
]
