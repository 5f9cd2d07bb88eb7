from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.organizations import (
    InviteOrganizationResponse,
    InviteOrganizationUseCase,
)
from src.depends import get_current_user_id, get_unit_of_work
from src.domain.entities import OrganizationType

router = APIRouter(prefix="/organizations", tags=["Organizations"])


class InviteOrganizationRequest(BaseModel):
    """Invite organization HTTP request payload"""

    email: EmailStr = Field(..., description="Contact email to invite")
    type: OrganizationType = Field(..., description="customer or vendor")
    name: str = Field("", max_length=255, description="Provisional organization name")


@router.post(
    "/invitations",
    status_code=status.HTTP_201_CREATED,
    response_model=InviteOrganizationResponse,
)
async def invite_organization(
    request: InviteOrganizationRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Invite Organization

    Creates an inactive organization and an onboarding invitation for it.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: UNAUTHORIZED
        - 409 Conflict: INVITE_ALREADY_EXISTS
        - 500 Internal Server Error: Server error
    """
    use_case = InviteOrganizationUseCase(uow)
    result = await use_case.execute(
        user_id, request.name, request.email, request.type
    )

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "INVITE_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value
