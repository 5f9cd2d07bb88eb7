from datetime import datetime, timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.app.use_cases.licenses import ConsumeUsageUseCase, ReleaseUsageUseCase
from src.app.use_cases.licenses.record_usage_use_case import MAX_USAGE_ATTEMPTS
from src.domain.entities import LicenseStatus, OrganizationType
from src.domain.licensing import build_license

NOW = datetime(2025, 6, 1)


def _license(usage=None, status=LicenseStatus.active, issued_days_ago=10):
    license = build_license(
        uuid4(),
        OrganizationType.customer,
        {"vessels": 3, "users": 10},
        NOW - timedelta(days=issued_days_ago),
    )
    license.status = status
    if usage:
        license.current_usage = {**license.current_usage, **usage}
    return license


@pytest.mark.asyncio
async def test_consume_increments_counter(mock_uow):
    license = _license(usage={"vessels": 1})
    mock_uow.licenses.get_open_by_organization_id.return_value = license

    result = await ConsumeUsageUseCase(mock_uow, clock=lambda: NOW).execute(
        license.organization_id, "vessels"
    )

    assert result.is_ok()
    assert result.value.current == 2
    assert result.value.limit == 3
    mock_uow.licenses.apply_usage.assert_called_once_with(
        license.id, license.version, {"vessels": 2, "users": 0}, NOW, (LicenseStatus.active,)
    )
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_consume_over_cap_leaves_counters_untouched(mock_uow):
    license = _license(usage={"vessels": 3})
    mock_uow.licenses.get_open_by_organization_id.return_value = license

    result = await ConsumeUsageUseCase(mock_uow, clock=lambda: NOW).execute(
        license.organization_id, "vessels"
    )

    assert result.is_err()
    assert result.error.code == "LIMIT_EXCEEDED"
    assert license.current_usage["vessels"] == 3
    mock_uow.licenses.apply_usage.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_consume_uncapped_resource(mock_uow):
    license = _license()
    mock_uow.licenses.get_open_by_organization_id.return_value = license

    result = await ConsumeUsageUseCase(mock_uow, clock=lambda: NOW).execute(
        license.organization_id, "items", 500
    )

    assert result.is_ok()
    assert result.value.current == 500
    assert result.value.limit is None


@pytest.mark.asyncio
async def test_consume_requires_active_license(mock_uow):
    license = _license(status=LicenseStatus.suspended)
    mock_uow.licenses.get_open_by_organization_id.return_value = license

    result = await ConsumeUsageUseCase(mock_uow, clock=lambda: NOW).execute(
        license.organization_id, "vessels"
    )

    assert result.error.code == "LICENSE_INACTIVE"


@pytest.mark.asyncio
async def test_consume_after_expiry(mock_uow):
    license = _license(issued_days_ago=400)
    mock_uow.licenses.get_open_by_organization_id.return_value = license

    result = await ConsumeUsageUseCase(mock_uow, clock=lambda: NOW).execute(
        license.organization_id, "vessels"
    )

    assert result.error.code == "LICENSE_INACTIVE"


@pytest.mark.asyncio
async def test_consume_without_license(mock_uow):
    mock_uow.licenses.get_open_by_organization_id.return_value = None

    result = await ConsumeUsageUseCase(mock_uow).execute(uuid4(), "vessels")

    assert result.error.code == "LICENSE_NOT_FOUND"


@pytest.mark.parametrize(
    "resource,amount,code",
    [("widgets", 1, "INVALID_RESOURCE"), ("vessels", 0, "INVALID_AMOUNT")],
)
@pytest.mark.asyncio
async def test_consume_validates_input(mock_uow, resource, amount, code):
    result = await ConsumeUsageUseCase(mock_uow).execute(uuid4(), resource, amount)

    assert result.error.code == code
    mock_uow.licenses.get_open_by_organization_id.assert_not_called()


@pytest.mark.asyncio
async def test_release_floors_at_zero(mock_uow):
    license = _license(usage={"vessels": 1})
    mock_uow.licenses.get_open_by_organization_id.return_value = license

    result = await ReleaseUsageUseCase(mock_uow, clock=lambda: NOW).execute(
        license.organization_id, "vessels", 5
    )

    assert result.is_ok()
    assert result.value.current == 0
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_consume_rechecks_capacity_after_lost_write(mock_uow):
    stale = _license(usage={"vessels": 2})
    current = _license(usage={"vessels": 3})
    current.id = stale.id
    current.version = stale.version + 1
    mock_uow.licenses.get_open_by_organization_id = AsyncMock(
        side_effect=[stale, current]
    )
    mock_uow.licenses.apply_usage.return_value = False

    result = await ConsumeUsageUseCase(mock_uow, clock=lambda: NOW).execute(
        stale.organization_id, "vessels"
    )

    assert result.error.code == "LIMIT_EXCEEDED"
    mock_uow.licenses.apply_usage.assert_called_once()
    mock_uow.rollback.assert_called_once()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_consume_retries_against_fresh_counters(mock_uow):
    stale = _license(usage={"vessels": 0})
    current = _license(usage={"vessels": 1})
    current.id = stale.id
    current.version = stale.version + 1
    mock_uow.licenses.get_open_by_organization_id = AsyncMock(
        side_effect=[stale, current]
    )
    mock_uow.licenses.apply_usage = AsyncMock(side_effect=[False, True])

    result = await ConsumeUsageUseCase(mock_uow, clock=lambda: NOW).execute(
        stale.organization_id, "vessels"
    )

    assert result.is_ok()
    assert result.value.current == 2
    retry = mock_uow.licenses.apply_usage.call_args_list[1][0]
    assert retry[1] == current.version
    assert retry[2]["vessels"] == 2
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_consume_gives_up_under_constant_contention(mock_uow):
    license = _license()
    mock_uow.licenses.get_open_by_organization_id.return_value = license
    mock_uow.licenses.apply_usage.return_value = False

    result = await ConsumeUsageUseCase(mock_uow, clock=lambda: NOW).execute(
        license.organization_id, "vessels"
    )

    assert result.error.code == "USAGE_CONFLICT"
    assert mock_uow.licenses.apply_usage.call_count == MAX_USAGE_ATTEMPTS
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_release_retries_after_lost_write(mock_uow):
    stale = _license(usage={"vessels": 2})
    current = _license(usage={"vessels": 3})
    current.id = stale.id
    mock_uow.licenses.get_open_by_organization_id = AsyncMock(
        side_effect=[stale, current]
    )
    mock_uow.licenses.apply_usage = AsyncMock(side_effect=[False, True])

    result = await ReleaseUsageUseCase(mock_uow, clock=lambda: NOW).execute(
        stale.organization_id, "vessels"
    )

    assert result.value.current == 2
    mock_uow.rollback.assert_called_once()
