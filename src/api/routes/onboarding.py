from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.onboarding import (
    ApproveOnboardingUseCase,
    GetOnboardingUseCase,
    ListOnboardingsUseCase,
    OnboardingInfo,
    RejectOnboardingResponse,
    RejectOnboardingUseCase,
    ReviewOnboardingResponse,
    SubmitOnboardingCommand,
    SubmitOnboardingUseCase,
)
from src.depends import get_current_user_id, get_unit_of_work
from src.domain.entities import OnboardingStatus

router = APIRouter(prefix="/onboarding", tags=["Onboarding"])


def _raise_review_error(error):
    if error.code in ("ONBOARDING_NOT_FOUND", "ORGANIZATION_NOT_FOUND"):
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    elif error.code == "UNAUTHORIZED":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    elif error.code in ("INVALID_TRANSITION", "LICENSE_SUSPENDED"):
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    raise ServerError(error)


class SubmitOnboardingRequest(SubmitOnboardingCommand):
    """
    Submit onboarding HTTP request payload

    The invitation token authenticates the submitter.
    """

    token: str = Field(..., min_length=1, description="Invitation token")


@router.post(
    "/submit", status_code=status.HTTP_201_CREATED, response_model=OnboardingInfo
)
async def submit_onboarding(
    request: SubmitOnboardingRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Submit Onboarding

    Public endpoint for the invited contact to hand in company, tax and
    banking details.

    Raises:
        - 400 Bad Request: INVALID_INVITATION
        - 404 Not Found: ORGANIZATION_NOT_FOUND
        - 409 Conflict: ONBOARDING_ALREADY_SUBMITTED
        - 422 Unprocessable Entity: INVALID_ONBOARDING_DATA
        - 500 Internal Server Error: Server error
    """
    command = SubmitOnboardingCommand(**request.model_dump(exclude={"token"}))

    use_case = SubmitOnboardingUseCase(uow)
    result = await use_case.execute(request.token, command)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_INVITATION":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "ORGANIZATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "ONBOARDING_ALREADY_SUBMITTED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "INVALID_ONBOARDING_DATA":
            raise ClientError(
                error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
            )
        raise ServerError(error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=List[OnboardingInfo])
async def list_onboardings(
    status_filter: Optional[OnboardingStatus] = Query(None, alias="status"),
    organization_id: Optional[UUID] = Query(None),
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Onboardings

    Records of organization types the reviewer cannot manage are omitted.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: UNAUTHORIZED
    """
    use_case = ListOnboardingsUseCase(uow)
    result = await use_case.execute(user_id, status_filter, organization_id)

    if result.is_err():
        _raise_review_error(result.error)

    return result.value


@router.get(
    "/{onboarding_id}", status_code=status.HTTP_200_OK, response_model=OnboardingInfo
)
async def get_onboarding(
    onboarding_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = GetOnboardingUseCase(uow)
    result = await use_case.execute(onboarding_id, user_id)

    if result.is_err():
        _raise_review_error(result.error)

    return result.value


@router.post(
    "/{onboarding_id}/approve",
    status_code=status.HTTP_200_OK,
    response_model=ReviewOnboardingResponse,
)
async def approve_onboarding(
    onboarding_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Approve Onboarding

    Approves the record, activates the organization and provisions its
    license in one transaction. Approving an already approved record returns
    the original result without creating anything.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: UNAUTHORIZED
        - 404 Not Found: ONBOARDING_NOT_FOUND, ORGANIZATION_NOT_FOUND
        - 409 Conflict: INVALID_TRANSITION, LICENSE_SUSPENDED
        - 503 Service Unavailable: PERSISTENCE_FAILURE (retryable)
    """
    use_case = ApproveOnboardingUseCase(uow)
    result = await use_case.execute(onboarding_id, user_id)

    if result.is_err():
        _raise_review_error(result.error)

    return result.value


class RejectOnboardingRequest(BaseModel):
    """Reject onboarding HTTP request payload"""

    reason: Optional[str] = Field(None, max_length=1000, description="Shown to the applicant")


@router.post(
    "/{onboarding_id}/reject",
    status_code=status.HTTP_200_OK,
    response_model=RejectOnboardingResponse,
)
async def reject_onboarding(
    onboarding_id: UUID,
    request: Optional[RejectOnboardingRequest] = None,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Reject Onboarding

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: UNAUTHORIZED
        - 404 Not Found: ONBOARDING_NOT_FOUND, ORGANIZATION_NOT_FOUND
        - 409 Conflict: INVALID_TRANSITION
        - 503 Service Unavailable: PERSISTENCE_FAILURE (retryable)
    """
    reason = request.reason if request else None

    use_case = RejectOnboardingUseCase(uow)
    result = await use_case.execute(onboarding_id, user_id, reason)

    if result.is_err():
        _raise_review_error(result.error)

    return result.value
