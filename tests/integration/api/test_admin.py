import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_admin_key_is_checked(client: AsyncClient):
    missing = await client.post(
        "/admin/organizations", json={"name": "Acme", "type": "customer"}
    )
    wrong = await client.post(
        "/admin/organizations",
        json={"name": "Acme", "type": "customer"},
        headers={"X-Admin-API-Key": "wrong"},
    )

    assert missing.status_code == 401
    assert wrong.status_code == 401
    assert wrong.json()["error"]["code"] == "INVALID_API_KEY"


@pytest.mark.asyncio
async def test_remove_organization(client: AsyncClient, admin_headers, login_as, onboard):
    created = await client.post(
        "/admin/organizations",
        json={"name": "Short Lived", "type": "vendor"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    assert created.json()["is_active"] is True

    deleted = await client.delete(
        f"/admin/organizations/{created.json()['id']}", headers=admin_headers
    )
    assert deleted.json()["status"] == "deleted"

    headers = await login_as("reviewer@platform.io")
    record = await onboard(headers)
    deactivated = await client.delete(
        f"/admin/organizations/{record['organization_id']}", headers=admin_headers
    )
    assert deactivated.json()["status"] == "deactivated"

    missing = await client.delete(
        f"/admin/organizations/{created.json()['id']}", headers=admin_headers
    )
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_role_with_foreign_permission(client: AsyncClient, admin_headers):
    response = await client.post(
        "/admin/roles",
        json={
            "name": "Confused",
            "portal_type": "admin",
            "permissions": ["onboardingView", "catalogueManage"],
        },
        headers=admin_headers,
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_PERMISSION"


@pytest.mark.asyncio
async def test_deleted_role_revokes_access_immediately(
    client: AsyncClient, admin_headers, login_as, onboard, db_session
):
    """Permissions are read from storage on every call, not from the token"""
    headers = await login_as("reviewer@platform.io")
    record = await onboard(headers)

    from sqlmodel import select
    from src.domain.entities import User

    user = (
        await db_session.exec(select(User).where(User.email == "reviewer@platform.io"))
    ).one()
    deleted = await client.delete(f"/admin/roles/{user.role_id}", headers=admin_headers)
    assert deleted.status_code == 200

    response = await client.post(f"/onboarding/{record['id']}/approve", headers=headers)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_resolve_permissions(client: AsyncClient, login_as):
    headers = await login_as("reviewer@platform.io")

    response = await client.get(
        "/permissions/resolve", params={"role_label": "Super Admin"}, headers=headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["role"] == "super_admin"
    assert "view_all_metrics" in data["granted_permissions"]

    fallback = await client.get("/permissions/resolve", headers=headers)
    assert fallback.json()["role"] == "customer_service"


@pytest.mark.asyncio
async def test_login_with_wrong_password(client: AsyncClient, login_as):
    await login_as("reviewer@platform.io")

    response = await client.post(
        "/auth/login", json={"email": "reviewer@platform.io", "password": "nope-nope"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"
