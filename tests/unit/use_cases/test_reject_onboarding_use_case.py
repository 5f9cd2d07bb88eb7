from datetime import datetime
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.app.use_cases.onboarding import RejectOnboardingUseCase
from src.domain.entities import OnboardingStatus

NOW = datetime(2025, 3, 2, 9, 30)


@pytest.fixture
def reject(mock_uow):
    return RejectOnboardingUseCase(mock_uow, clock=lambda: NOW)


@pytest.mark.asyncio
async def test_reject_with_reason(
    mock_uow, reject, make_reviewer, customer_org, make_onboarding
):
    reviewer = make_reviewer()
    onboarding = make_onboarding(customer_org)
    mock_uow.onboardings.get_by_id.return_value = onboarding
    mock_uow.organizations.get_by_id.return_value = customer_org

    result = await reject.execute(onboarding.id, reviewer.id, "  Missing tax documents ")

    assert result.is_ok()
    info = result.value.onboarding
    assert info.status == "rejected"
    assert info.rejection_reason == "Missing tax documents"
    assert info.reviewer_id == str(reviewer.id)

    kwargs = mock_uow.onboardings.transition.call_args.kwargs
    assert kwargs["rejection_reason"] == "Missing tax documents"
    assert kwargs["reviewed_at"] == NOW

    mock_uow.licenses.create.assert_not_called()
    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "onboarding_rejected"
    mock_uow.commit.assert_called_once()


@pytest.mark.parametrize("reason", [None, "", "   "])
@pytest.mark.asyncio
async def test_blank_reason_is_not_stored(
    mock_uow, reject, make_reviewer, customer_org, make_onboarding, reason
):
    reviewer = make_reviewer()
    onboarding = make_onboarding(customer_org, status=OnboardingStatus.pending)
    mock_uow.onboardings.get_by_id.return_value = onboarding
    mock_uow.organizations.get_by_id.return_value = customer_org

    result = await reject.execute(onboarding.id, reviewer.id, reason)

    assert result.is_ok()
    assert result.value.onboarding.rejection_reason is None
    assert onboarding.rejection_reason is None


@pytest.mark.parametrize(
    "status", [OnboardingStatus.approved, OnboardingStatus.rejected]
)
@pytest.mark.asyncio
async def test_terminal_records_cannot_be_rejected(
    mock_uow, reject, make_reviewer, customer_org, make_onboarding, status
):
    reviewer = make_reviewer()
    mock_uow.onboardings.get_by_id.return_value = make_onboarding(
        customer_org, status=status
    )
    mock_uow.organizations.get_by_id.return_value = customer_org

    result = await reject.execute(uuid4(), reviewer.id, "late")

    assert result.is_err()
    assert result.error.code == "INVALID_TRANSITION"
    mock_uow.onboardings.transition.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_reject_requires_onboarding_manage(
    mock_uow, reject, make_reviewer, customer_org, make_onboarding
):
    reviewer = make_reviewer(["onboardingView", "licensesIssue", "customerOrgsManage"])
    mock_uow.onboardings.get_by_id.return_value = make_onboarding(customer_org)
    mock_uow.organizations.get_by_id.return_value = customer_org

    result = await reject.execute(uuid4(), reviewer.id)

    assert result.error.code == "UNAUTHORIZED"
    mock_uow.onboardings.transition.assert_not_called()


@pytest.mark.asyncio
async def test_concurrent_review_wins(
    mock_uow, reject, make_reviewer, customer_org, make_onboarding
):
    reviewer = make_reviewer()
    mock_uow.onboardings.get_by_id = AsyncMock(
        return_value=make_onboarding(customer_org)
    )
    mock_uow.organizations.get_by_id.return_value = customer_org
    mock_uow.onboardings.transition.return_value = False

    result = await reject.execute(uuid4(), reviewer.id, "duplicate")

    assert result.error.code == "INVALID_TRANSITION"
    mock_uow.rollback.assert_called_once()
    mock_uow.audit_events.create.assert_not_called()
    mock_uow.commit.assert_not_called()
