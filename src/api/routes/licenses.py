from typing import Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.licenses import (
    ChangeLicenseStatusUseCase,
    IssueLicenseUseCase,
    LicenseInfo,
    ListLicensesUseCase,
)
from src.depends import get_current_user_id, get_unit_of_work
from src.domain.entities import LicenseStatus

router = APIRouter(prefix="/licenses", tags=["Licenses"])


@router.get("", status_code=status.HTTP_200_OK, response_model=List[LicenseInfo])
async def list_licenses(
    organization_id: UUID = Query(...),
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Licenses

    Raises:
        - 403 Forbidden: UNAUTHORIZED
        - 404 Not Found: ORGANIZATION_NOT_FOUND
    """
    use_case = ListLicensesUseCase(uow)
    result = await use_case.execute(user_id, organization_id)

    if result.is_err():
        error = result.error
        if error.code == "ORGANIZATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


class IssueLicenseRequest(BaseModel):
    """Issue license HTTP request payload"""

    organization_id: UUID = Field(..., description="Organization to license")
    usage_limits: Optional[Dict[str, int]] = Field(
        None, description="Resource caps; defaults by organization type"
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=LicenseInfo)
async def issue_license(
    request: IssueLicenseRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Issue License

    Raises:
        - 403 Forbidden: UNAUTHORIZED
        - 404 Not Found: ORGANIZATION_NOT_FOUND
        - 409 Conflict: LICENSE_ALREADY_EXISTS
        - 422 Unprocessable Entity: INVALID_USAGE_LIMITS
    """
    use_case = IssueLicenseUseCase(uow)
    result = await use_case.execute(
        user_id, request.organization_id, request.usage_limits
    )

    if result.is_err():
        error = result.error
        if error.code == "ORGANIZATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "LICENSE_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "INVALID_USAGE_LIMITS":
            raise ClientError(
                error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
            )
        raise ServerError(error)

    return result.value


class ChangeLicenseStatusRequest(BaseModel):
    """Change license status HTTP request payload"""

    status: LicenseStatus = Field(..., description="Target status")


@router.post(
    "/{license_id}/status", status_code=status.HTTP_200_OK, response_model=LicenseInfo
)
async def change_license_status(
    license_id: UUID,
    request: ChangeLicenseStatusRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change License Status

    Suspend, reinstate, expire or revoke a license.

    Raises:
        - 403 Forbidden: UNAUTHORIZED
        - 404 Not Found: LICENSE_NOT_FOUND
        - 409 Conflict: INVALID_TRANSITION
    """
    use_case = ChangeLicenseStatusUseCase(uow)
    result = await use_case.execute(user_id, license_id, request.status)

    if result.is_err():
        error = result.error
        if error.code == "LICENSE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "INVALID_TRANSITION":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value
