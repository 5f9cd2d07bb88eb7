from uuid import UUID

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from src.adapter.repositories.license_repository import LicenseRepository
from src.domain.entities import (
    AuditEvent,
    License,
    OnboardingRecord,
    Organization,
)
from tests.utils.json_compare import exclude_keys


@pytest.mark.asyncio
async def test_submit_then_approve_provisions_license(
    client: AsyncClient, db_session, login_as, onboard
):
    """
    Given a completed customer onboarding requesting 3 vessels
    When a reviewer with licensesIssue approves it
    Then the record is approved, the organization active,
    and exactly one active license exists with default caps
    """
    headers = await login_as("reviewer@platform.io")
    record = await onboard(headers)
    assert record["status"] == "completed"

    response = await client.post(
        f"/onboarding/{record['id']}/approve", headers=headers
    )

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["onboarding"]["status"] == "approved"
    assert data["onboarding"]["reviewed_at"] is not None
    assert exclude_keys(
        data["onboarding"], {"status", "reviewer_id", "reviewed_at"}
    ) == exclude_keys(record, {"status", "reviewer_id", "reviewed_at"})

    organization_id = UUID(record["organization_id"])
    licenses = (
        await db_session.exec(
            select(License).where(License.organization_id == organization_id)
        )
    ).all()
    assert len(licenses) == 1
    license = licenses[0]
    assert str(license.id) == data["license_id"]
    assert license.status.value == "active"
    assert license.usage_limits == {
        "users": 10,
        "vessels": 3,
        "items": 1000,
        "employees": 50,
        "businessUnits": 5,
    }
    assert set(license.current_usage.values()) == {0}

    organization = (
        await db_session.exec(select(Organization).where(Organization.id == organization_id))
    ).one()
    assert organization.is_active is True
    assert organization.name == "Ocean Freight Ltd"

    actions = (
        await db_session.exec(
            select(AuditEvent.action).where(AuditEvent.organization_id == organization_id)
        )
    ).all()
    assert "onboarding_approved" in actions
    assert "license_issued" in actions


@pytest.mark.asyncio
async def test_vendor_approval(client: AsyncClient, db_session, login_as, onboard):
    headers = await login_as("reviewer@platform.io")
    record = await onboard(headers, organization_type="vendor", email="sam@parts.co")
    assert record["vessels"] is None

    response = await client.post(
        f"/onboarding/{record['id']}/approve", headers=headers
    )

    assert response.status_code == 200
    license = (
        await db_session.exec(select(License).where(License.id == UUID(response.json()["license_id"])))
    ).one()
    assert "vessels" not in license.usage_limits


@pytest.mark.asyncio
async def test_approve_is_idempotent(client: AsyncClient, db_session, login_as, onboard):
    headers = await login_as("reviewer@platform.io")
    record = await onboard(headers)

    first = await client.post(f"/onboarding/{record['id']}/approve", headers=headers)
    second = await client.post(f"/onboarding/{record['id']}/approve", headers=headers)

    assert first.status_code == 200
    assert second.status_code == 200
    assert second.json()["license_id"] == first.json()["license_id"]

    licenses = (
        await db_session.exec(
            select(License).where(
                License.organization_id == UUID(record["organization_id"])
            )
        )
    ).all()
    assert len(licenses) == 1


@pytest.mark.asyncio
async def test_reject_then_approve_is_refused(
    client: AsyncClient, db_session, login_as, onboard
):
    """
    Given a completed onboarding
    When it is rejected with a reason and later approved
    Then the approval fails with INVALID_TRANSITION and no license exists
    """
    headers = await login_as("reviewer@platform.io")
    record = await onboard(headers)

    reject = await client.post(
        f"/onboarding/{record['id']}/reject",
        json={"reason": "Incomplete banking details"},
        headers=headers,
    )
    assert reject.status_code == 200
    assert reject.json()["onboarding"]["status"] == "rejected"
    assert reject.json()["onboarding"]["rejection_reason"] == "Incomplete banking details"

    approve = await client.post(f"/onboarding/{record['id']}/approve", headers=headers)
    assert approve.status_code == 409
    assert approve.json()["error"]["code"] == "INVALID_TRANSITION"

    again = await client.post(f"/onboarding/{record['id']}/reject", headers=headers)
    assert again.status_code == 409

    licenses = (
        await db_session.exec(
            select(License).where(
                License.organization_id == UUID(record["organization_id"])
            )
        )
    ).all()
    assert licenses == []


@pytest.mark.asyncio
async def test_reject_without_body(client: AsyncClient, login_as, onboard):
    headers = await login_as("reviewer@platform.io")
    record = await onboard(headers)

    response = await client.post(f"/onboarding/{record['id']}/reject", headers=headers)

    assert response.status_code == 200
    assert response.json()["onboarding"]["rejection_reason"] is None


@pytest.mark.asyncio
async def test_reviewer_without_licenses_issue_cannot_approve(
    client: AsyncClient, db_session, login_as, onboard
):
    manager = await login_as("manager@platform.io")
    record = await onboard(manager)
    viewer = await login_as(
        "viewer@platform.io",
        permissions=["onboardingView", "onboardingManage", "customerOrgsManage"],
    )

    response = await client.post(f"/onboarding/{record['id']}/approve", headers=viewer)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "UNAUTHORIZED"

    stored = (
        await db_session.exec(
            select(OnboardingRecord).where(OnboardingRecord.id == UUID(record["id"]))
        )
    ).one()
    assert stored.status.value == "completed"
    assert (await db_session.exec(select(License))).all() == []


@pytest.mark.asyncio
async def test_missing_token_is_rejected(client: AsyncClient, login_as, onboard):
    headers = await login_as("reviewer@platform.io")
    record = await onboard(headers)

    response = await client.post(f"/onboarding/{record['id']}/approve")

    assert response.status_code in (401, 403)


@pytest.mark.asyncio
async def test_unknown_onboarding(client: AsyncClient, login_as):
    headers = await login_as("reviewer@platform.io")

    response = await client.post(
        "/onboarding/00000000-0000-0000-0000-000000000000/approve", headers=headers
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ONBOARDING_NOT_FOUND"


@pytest.mark.asyncio
async def test_storage_failure_leaves_record_untouched(
    client: AsyncClient, db_session, login_as, onboard, monkeypatch
):
    """
    Given the license insert fails mid-approval
    Then the API answers 503 PERSISTENCE_FAILURE
    And the record is still completed with no license and an inactive organization
    And a retry once storage recovers succeeds
    """
    headers = await login_as("reviewer@platform.io")
    record = await onboard(headers)

    async def failing_create(self, license):
        raise OperationalError("INSERT INTO licenses", {}, Exception("disk I/O error"))

    with monkeypatch.context() as patch:
        patch.setattr(LicenseRepository, "create", failing_create)
        response = await client.post(
            f"/onboarding/{record['id']}/approve", headers=headers
        )

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "PERSISTENCE_FAILURE"

    stored = (
        await db_session.exec(
            select(OnboardingRecord).where(OnboardingRecord.id == UUID(record["id"]))
        )
    ).one()
    assert stored.status.value == "completed"
    assert stored.reviewer_id is None
    organization = (
        await db_session.exec(
            select(Organization).where(
                Organization.id == UUID(record["organization_id"])
            )
        )
    ).one()
    assert organization.is_active is False
    assert (await db_session.exec(select(License))).all() == []

    retry = await client.post(f"/onboarding/{record['id']}/approve", headers=headers)
    assert retry.status_code == 200


@pytest.mark.asyncio
async def test_list_and_get_onboardings(client: AsyncClient, login_as, onboard):
    headers = await login_as("reviewer@platform.io")
    record = await onboard(headers)

    listed = await client.get("/onboarding", params={"status": "completed"}, headers=headers)
    assert listed.status_code == 200
    assert [item["id"] for item in listed.json()] == [record["id"]]

    fetched = await client.get(f"/onboarding/{record['id']}", headers=headers)
    assert fetched.status_code == 200
    assert fetched.json() == record

    none_approved = await client.get(
        "/onboarding", params={"status": "approved"}, headers=headers
    )
    assert none_approved.json() == []


@pytest.mark.asyncio
async def test_vendor_scoped_reviewer_does_not_see_customers(
    client: AsyncClient, login_as, onboard
):
    manager = await login_as("manager@platform.io")
    await onboard(manager)
    vendor_reviewer = await login_as(
        "vendors@platform.io", permissions=["onboardingView", "vendorOrgsManage"]
    )

    response = await client.get("/onboarding", headers=vendor_reviewer)

    assert response.status_code == 200
    assert response.json() == []
