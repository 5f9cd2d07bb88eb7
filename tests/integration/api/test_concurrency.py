import asyncio
from uuid import UUID

import pytest
from httpx import AsyncClient
from sqlalchemy.orm import sessionmaker
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import verify_jwt
from src.app.use_cases.licenses import ConsumeUsageUseCase, ReleaseUsageUseCase
from src.app.use_cases.onboarding import ApproveOnboardingUseCase
from src.domain.entities import License

PARALLEL_CALLS = 5


def _user_id(headers) -> UUID:
    token = headers["Authorization"].split(" ", 1)[1]
    return UUID(verify_jwt(token)["user_id"])


async def _run_in_own_sessions(engine, make_use_case, *args):
    """Run one use case per session, all at once; returns every Result"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def _call():
        async with Session() as session:
            return await make_use_case(SqlAlchemyUnitOfWork(session)).execute(*args)

    return await asyncio.gather(*(_call() for _ in range(PARALLEL_CALLS)))


async def _licenses_of(engine, organization_id):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        result = await session.execute(
            select(License).where(License.organization_id == organization_id)
        )
        return list(result.scalars().all())


@pytest.mark.asyncio
async def test_parallel_approvals_issue_one_license(
    client: AsyncClient, engine, login_as, onboard
):
    """
    Given a completed onboarding
    When several reviewers approve it at the same moment
    Then every call succeeds with the same license id
    and the organization holds exactly one license
    """
    headers = await login_as("reviewer@platform.io")
    record = await onboard(headers)

    results = await _run_in_own_sessions(
        engine,
        ApproveOnboardingUseCase,
        UUID(record["id"]),
        _user_id(headers),
    )

    assert all(result.is_ok() for result in results)
    license_ids = {result.value.license_id for result in results}
    assert len(license_ids) == 1

    licenses = await _licenses_of(engine, UUID(record["organization_id"]))
    assert [str(license.id) for license in licenses] == list(license_ids)


@pytest.mark.asyncio
async def test_parallel_consumes_stop_at_cap(
    client: AsyncClient, engine, login_as, onboard
):
    """
    Given an approved customer with a vessels cap of 3
    When five vessels are consumed at the same moment
    Then exactly three succeed, the rest hit LIMIT_EXCEEDED,
    and the stored counter is 3
    """
    headers = await login_as("reviewer@platform.io")
    record = await onboard(headers)
    approved = await client.post(f"/onboarding/{record['id']}/approve", headers=headers)
    assert approved.status_code == 200
    organization_id = UUID(record["organization_id"])

    results = await _run_in_own_sessions(
        engine, ConsumeUsageUseCase, organization_id, "vessels"
    )

    granted = [result for result in results if result.is_ok()]
    refused = [result for result in results if result.is_err()]
    assert len(granted) == 3
    assert sorted(result.value.current for result in granted) == [1, 2, 3]
    assert {result.error.code for result in refused} == {"LIMIT_EXCEEDED"}

    (license,) = await _licenses_of(engine, organization_id)
    assert license.current_usage["vessels"] == 3
    assert license.version == 4


@pytest.mark.asyncio
async def test_parallel_releases_are_all_counted(
    client: AsyncClient, engine, login_as, onboard, admin_headers
):
    """
    Given a customer that has used 3 of 3 vessels
    When five releases arrive at the same moment
    Then none of them is lost and the counter floors at zero
    """
    headers = await login_as("reviewer@platform.io")
    record = await onboard(headers)
    approved = await client.post(f"/onboarding/{record['id']}/approve", headers=headers)
    assert approved.status_code == 200
    organization_id = UUID(record["organization_id"])
    url = f"/admin/organizations/{organization_id}/usage/vessels/consume"
    for _ in range(3):
        response = await client.post(url, headers=admin_headers)
        assert response.status_code == 200

    results = await _run_in_own_sessions(
        engine, ReleaseUsageUseCase, organization_id, "vessels"
    )

    assert all(result.is_ok() for result in results)
    (license,) = await _licenses_of(engine, organization_id)
    assert license.current_usage["vessels"] == 0
    assert license.version == 1 + 3 + PARALLEL_CALLS
