"""RBAC seed: built-in permission catalog and system roles.

seed_catalog_and_roles() is idempotent: each row is looked up before
insert, a duplicate raised by the store on insert (a concurrent seeder
won the race) counts as already existing, and existing rows are never
overwritten.
"""

from __future__ import annotations

from typing import TypedDict

from itam.application.dtos.seed import SeedReport
from itam.application.interfaces.repositories import IPermissionRepository, IRoleRepository
from itam.domain.entities.permission import PermissionEntity
from itam.domain.entities.role import RoleEntity
from itam.domain.enums import PermissionCategory, RoleCategory
from itam.domain.exceptions import DuplicatePermissionKeyException, DuplicateRoleNameException
from itam.domain.value_objects.core import WILDCARD, ScopeCapability
from itam.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class RoleData(TypedDict):
    """Role configuration for built-in roles."""

    display_name: str
    description: str
    priority: int
    permissions: list[str]
    multi_branch: bool
    multi_enterprise: bool


_USER = PermissionCategory.USER_MANAGEMENT
_ASSET = PermissionCategory.ASSET_MANAGEMENT
_REPORT = PermissionCategory.REPORTING
_ORG = PermissionCategory.ORGANIZATION
_BRANCH = PermissionCategory.BRANCH
_SYSTEM = PermissionCategory.SYSTEM_ADMIN
_AUDIT = PermissionCategory.AUDIT

# (key, category, is_critical, description)
SYSTEM_PERMISSIONS: list[tuple[str, PermissionCategory, bool, str]] = [
    ("user:create", _USER, False, "Create new user accounts"),
    ("user:read", _USER, False, "View user details and profiles"),
    ("user:update", _USER, False, "Update user information (name, email, designation, etc.)"),
    ("user:delete", _USER, True, "Delete user accounts"),
    ("user:disable", _USER, True, "Disable/enable user accounts"),
    ("user:change_password", _USER, True, "Set or reset user passwords"),
    ("user:assign_role", _USER, True, "Assign or change user roles"),
    ("user:assign_branch", _USER, False, "Assign user to branches"),
    ("user:import", _USER, False, "Bulk import users"),
    ("asset:create", _ASSET, False, "Create/add new assets to the system"),
    ("asset:read", _ASSET, False, "View asset details and lists"),
    ("asset:update", _ASSET, False, "Update asset information"),
    ("asset:delete", _ASSET, True, "Delete assets from system"),
    ("asset:assign", _ASSET, False, "Assign assets to users"),
    ("asset:transfer", _ASSET, False, "Transfer assets between users/branches"),
    ("asset:deprecate", _ASSET, False, "Mark assets as deprecated"),
    ("asset:import", _ASSET, False, "Bulk import assets"),
    ("report:view", _REPORT, False, "View reports and dashboards"),
    ("report:export", _REPORT, False, "Export reports to CSV/Excel"),
    ("report:generate", _REPORT, False, "Generate custom reports"),
    ("report:schedule", _REPORT, False, "Schedule automated reports"),
    ("organization:create", _ORG, True, "Create new organizations/enterprises"),
    ("organization:read", _ORG, False, "View organization details"),
    ("organization:update", _ORG, True, "Update organization settings"),
    ("organization:delete", _ORG, True, "Delete organizations"),
    ("branch:create", _BRANCH, False, "Create new branches"),
    ("branch:read", _BRANCH, False, "View branch details"),
    ("branch:update", _BRANCH, False, "Update branch information"),
    ("branch:delete", _BRANCH, True, "Delete branches"),
    ("system:admin", _SYSTEM, True, "Full system administration access"),
    ("system:configure", _SYSTEM, True, "Configure system settings"),
    ("system:audit", _SYSTEM, True, "Access system audit logs"),
    ("audit:view", _AUDIT, False, "View audit logs and activity history"),
    ("audit:export", _AUDIT, False, "Export audit logs"),
]

BUILT_IN_ROLES: dict[str, RoleData] = {
    "super_admin": {
        "display_name": "Super Administrator",
        "description": "Full system access - can manage everything",
        "priority": 1,
        "permissions": [WILDCARD],
        "multi_branch": True,
        "multi_enterprise": True,
    },
    "enterprise_admin": {
        "display_name": "Enterprise Administrator",
        "description": "Can manage assigned enterprises and their branches",
        "priority": 2,
        "permissions": [
            "user:create",
            "user:read",
            "user:update",
            "user:disable",
            "user:assign_role",
            "user:assign_branch",
            "asset:create",
            "asset:read",
            "asset:update",
            "asset:assign",
            "asset:transfer",
            "branch:read",
            "branch:create",
            "branch:update",
            "report:view",
            "report:export",
            "audit:view",
        ],
        "multi_branch": True,
        "multi_enterprise": False,
    },
    "branch_admin": {
        "display_name": "Branch Administrator",
        "description": "Can manage assigned branch(es) and users within those branch(es)",
        "priority": 3,
        "permissions": [
            "user:create",
            "user:read",
            "user:update",
            "user:disable",
            "asset:create",
            "asset:read",
            "asset:update",
            "asset:assign",
            "asset:transfer",
            "report:view",
            "report:export",
            "audit:view",
        ],
        "multi_branch": True,
        "multi_enterprise": False,
    },
    "user": {
        "display_name": "Regular User",
        "description": "Can view assets and update own profile",
        "priority": 100,
        "permissions": ["asset:read", "user:read", "report:view"],
        "multi_branch": False,
        "multi_enterprise": False,
    },
}


def build_system_permissions() -> list[PermissionEntity]:
    """Catalog entities for SYSTEM_PERMISSIONS."""
    return [
        PermissionEntity(key=key, category=category, description=description, is_critical=critical)
        for key, category, critical, description in SYSTEM_PERMISSIONS
    ]


def build_built_in_roles() -> list[RoleEntity]:
    """Protected system role entities for BUILT_IN_ROLES."""
    return [
        RoleEntity(
            name=name,
            permissions=set(data["permissions"]),
            priority=data["priority"],
            scope_capability=ScopeCapability(
                multi_branch=data["multi_branch"],
                multi_enterprise=data["multi_enterprise"],
            ),
            display_name=data["display_name"],
            description=data["description"],
            category=RoleCategory.SYSTEM,
            is_protected=True,
        )
        for name, data in BUILT_IN_ROLES.items()
    ]


async def seed_permissions(permission_repo: IPermissionRepository, report: SeedReport) -> None:
    for permission in build_system_permissions():
        if await permission_repo.get_by_key(permission.key):
            report.existing_permissions.append(permission.key)
            continue
        try:
            await permission_repo.create(permission)
        except DuplicatePermissionKeyException:
            logger.debug("Permission %s inserted concurrently; treating as existing", permission.key)
            report.existing_permissions.append(permission.key)
            continue
        report.created_permissions.append(permission.key)


async def seed_roles(role_repo: IRoleRepository, report: SeedReport) -> None:
    for role in build_built_in_roles():
        if await role_repo.get_by_name(role.name):
            report.existing_roles.append(role.name)
            continue
        try:
            await role_repo.create(role)
        except DuplicateRoleNameException:
            logger.debug("Role %s inserted concurrently; treating as existing", role.name)
            report.existing_roles.append(role.name)
            continue
        report.created_roles.append(role.name)


async def seed_catalog_and_roles(
    permission_repo: IPermissionRepository,
    role_repo: IRoleRepository,
) -> SeedReport:
    """Ensure the built-in catalog and roles exist. Safe to run on every startup."""
    report = SeedReport()
    await seed_permissions(permission_repo, report)
    await seed_roles(role_repo, report)
    logger.info(
        "RBAC seed complete: %d permission(s) created, %d existing; %d role(s) created, %d existing",
        len(report.created_permissions),
        len(report.existing_permissions),
        len(report.created_roles),
        len(report.existing_roles),
    )
    return report
