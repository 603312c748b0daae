"""Authorization gate tests: scoped/any-of/all-of route dependencies, /me and /authz/check."""

from typing import Annotated, Any

import pytest
from fastapi import APIRouter, Body, Depends, FastAPI, Request
from httpx import AsyncClient

from itam.api.v1.dependencies import (
    require_all_permissions,
    require_any_permission,
    require_scoped_permission,
)
from itam.domain.entities.principal import Principal

ROOT = {"X-Principal-Id": "root"}
ENT = {"X-Principal-Id": "ent"}
BRANCH = {"X-Principal-Id": "branch"}
VIEWER = {"X-Principal-Id": "viewer"}

gated = APIRouter()


@gated.post("/branches/{branch_id}/assets")
async def create_asset(
    branch_id: str,
    principal: Annotated[Principal, Depends(require_scoped_permission("asset:create"))],
) -> dict[str, str]:
    return {"principal": principal.id, "branch_id": branch_id}


@gated.put("/assets")
async def update_asset(
    request: Request,
    payload: Annotated[dict[str, Any], Body()],
    principal: Annotated[Principal, Depends(require_scoped_permission("asset:update"))],
) -> dict[str, Any]:
    context = request.state.operation_context
    return {"scope": context.resource_scope.to_dict()}


@gated.get("/assets")
async def list_assets(
    principal: Annotated[Principal, Depends(require_scoped_permission("asset:read"))],
) -> dict[str, str]:
    return {"principal": principal.id}


@gated.post("/transfers")
async def transfer_asset(
    payload: Annotated[dict[str, Any], Body()],
    principal: Annotated[
        Principal,
        Depends(require_scoped_permission("asset:transfer", branch_field="to_branch_id")),
    ],
) -> dict[str, str]:
    return {"principal": principal.id}


@gated.get("/reports")
async def view_reports(
    principal: Annotated[
        Principal, Depends(require_any_permission("report:view", "report:export"))
    ],
) -> dict[str, str]:
    return {"principal": principal.id}


@gated.get("/audit-archive")
async def export_audit_archive(
    principal: Annotated[
        Principal, Depends(require_all_permissions("system:admin", "audit:export"))
    ],
) -> dict[str, str]:
    return {"principal": principal.id}


@pytest.fixture
async def gated_client(app: FastAPI, client: AsyncClient) -> AsyncClient:
    """Client whose app also mounts the gated test routes under /gated."""
    app.include_router(gated, prefix="/gated")
    return client


class TestScopedGate:
    async def test_branch_admin_in_own_branch(self, gated_client: AsyncClient) -> None:
        response = await gated_client.post("/gated/branches/b1/assets", headers=BRANCH)
        assert response.status_code == 200
        assert response.json() == {"principal": "branch", "branch_id": "b1"}

    async def test_branch_admin_in_other_branch_is_scope_denied(
        self, gated_client: AsyncClient
    ) -> None:
        response = await gated_client.post("/gated/branches/b2/assets", headers=BRANCH)
        assert response.status_code == 403
        data = response.json()
        assert data["error"] == "SCOPE_DENIED"
        assert data["details"] == {
            "required": ["asset:create"],
            "denied_scope": {"dimension": "branch", "branch_id": "b2", "enterprise_id": None},
        }

    async def test_missing_permission_is_permission_denied(
        self, gated_client: AsyncClient
    ) -> None:
        response = await gated_client.post("/gated/branches/b1/assets", headers=VIEWER)
        assert response.status_code == 403
        assert response.json()["error"] == "PERMISSION_DENIED"

    async def test_anonymous_is_not_authenticated(self, gated_client: AsyncClient) -> None:
        response = await gated_client.post("/gated/branches/b1/assets")
        assert response.status_code == 401

    async def test_super_admin_reaches_any_branch(self, gated_client: AsyncClient) -> None:
        response = await gated_client.post("/gated/branches/b42/assets", headers=ROOT)
        assert response.status_code == 200

    async def test_scope_read_from_json_body(self, gated_client: AsyncClient) -> None:
        allowed = await gated_client.put(
            "/gated/assets", headers=ENT, json={"enterprise_id": "e1", "branch_id": "b2"}
        )
        assert allowed.status_code == 200
        assert allowed.json()["scope"] == {"branch_id": "b2", "enterprise_id": "e1"}

        denied = await gated_client.put(
            "/gated/assets", headers=ENT, json={"enterprise_id": "e2", "branch_id": "b1"}
        )
        assert denied.status_code == 403
        assert denied.json()["details"]["denied_scope"]["dimension"] == "enterprise"

    async def test_scope_read_from_query(self, gated_client: AsyncClient) -> None:
        assert (
            await gated_client.get("/gated/assets", params={"branch_id": "b1"}, headers=BRANCH)
        ).status_code == 200
        assert (
            await gated_client.get("/gated/assets", params={"branch_id": "b2"}, headers=BRANCH)
        ).status_code == 403

    async def test_custom_scope_field(self, gated_client: AsyncClient) -> None:
        response = await gated_client.post(
            "/gated/transfers",
            headers=BRANCH,
            json={"branch_id": "b1", "to_branch_id": "b2"},
        )
        assert response.status_code == 403
        assert response.json()["details"]["denied_scope"]["branch_id"] == "b2"


class TestAnyOfAndAllOfGates:
    async def test_any_of(self, gated_client: AsyncClient) -> None:
        assert (await gated_client.get("/gated/reports", headers=VIEWER)).status_code == 200

    async def test_all_of_lists_missing_keys(self, gated_client: AsyncClient) -> None:
        response = await gated_client.get("/gated/audit-archive", headers=ENT)
        assert response.status_code == 403
        assert response.json()["details"]["required"] == ["system:admin", "audit:export"]
        assert (await gated_client.get("/gated/audit-archive", headers=ROOT)).status_code == 200


class TestMyPermissions:
    async def test_super_admin_gets_expanded_catalog(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/me/permissions", headers=ROOT)
        assert response.status_code == 200
        data = response.json()
        assert data["is_super_admin"] is True
        assert data["role_name"] == "super_admin"
        assert len(data["permissions"]) == 34
        assert "*" not in data["permissions"]
        assert data["accessible_branches"] == ["*"]
        assert data["accessible_enterprises"] == ["*"]

    async def test_branch_admin_gets_own_keys_and_scopes(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/me/permissions", headers=BRANCH)
        data = response.json()
        assert data["is_super_admin"] is False
        assert len(data["permissions"]) == 12
        assert data["permissions"] == sorted(data["permissions"])
        assert data["accessible_branches"] == ["b1"]
        assert data["accessible_enterprises"] == []

    async def test_requires_principal(self, client: AsyncClient) -> None:
        assert (await client.get("/api/v1/me/permissions")).status_code == 401


class TestAuthzCheck:
    async def test_scoped_denial_is_reported_not_raised(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/authz/check",
            headers=ENT,
            json={
                "policy": {"kind": "scoped_single", "keys": ["asset:update"]},
                "target": {"enterprise_id": "e2"},
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["granted"] is False
        assert data["reason"] == "scope_denied"
        assert data["required"] == ["asset:update"]
        assert data["denied_scope"]["dimension"] == "enterprise"

    async def test_grant_includes_policy_and_scope(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/authz/check",
            headers=BRANCH,
            json={
                "policy": {"kind": "scoped_single", "keys": ["asset:read"]},
                "target": [{"branch_id": ""}, {"branch_id": "b1"}],
            },
        )
        data = response.json()
        assert data["granted"] is True
        assert data["scope"] == {"branch_id": "b1", "enterprise_id": None}
        assert data["policy"]["kind"] == "scoped_single"

    async def test_empty_any_of_never_grants(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/authz/check",
            headers=ROOT,
            json={"policy": {"kind": "any_of", "keys": []}},
        )
        data = response.json()
        assert data["granted"] is False
        assert data["reason"] == "insufficient_permission"

    async def test_malformed_policy_returns_400(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/authz/check",
            headers=ROOT,
            json={"policy": {"kind": "single", "keys": ["asset:read", "asset:update"]}},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"
