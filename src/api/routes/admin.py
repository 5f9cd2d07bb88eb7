"""
Admin API Routes - Platform Administration Endpoints

These endpoints are for the platform super-admin and internal service
integrations (e.g., services that create capped resources).
Authentication is via Admin API Key, not user JWTs.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.licenses import (
    ConsumeUsageUseCase,
    ReleaseUsageUseCase,
    UsageResponse,
)
from src.app.use_cases.organizations import (
    CreateOrganizationUseCase,
    OrganizationInfo,
    RemoveOrganizationResponse,
    RemoveOrganizationUseCase,
)
from src.app.use_cases.roles import CreateRoleUseCase, DeleteRoleUseCase, RoleInfo
from src.app.use_cases.users import (
    AssignRoleUseCase,
    CreateUserCommand,
    CreateUserUseCase,
    UserInfo,
)
from src.depends import get_unit_of_work
from src.domain.entities import OrganizationType, PortalType

router = APIRouter(
    prefix="/admin", tags=["Admin"], dependencies=[Depends(verify_admin_api_key)]
)


# ============================================================================
# Organizations
# ============================================================================


class CreateOrganizationRequest(BaseModel):
    """Create organization HTTP request payload"""

    name: str = Field(..., min_length=1, max_length=255)
    type: OrganizationType


@router.post(
    "/organizations",
    status_code=status.HTTP_201_CREATED,
    response_model=OrganizationInfo,
)
async def create_organization(
    request: CreateOrganizationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Organization

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 400 Bad Request: INVALID_ORGANIZATION_NAME
    """
    use_case = CreateOrganizationUseCase(uow)
    result = await use_case.execute(request.name, request.type)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_ORGANIZATION_NAME":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.delete(
    "/organizations/{organization_id}",
    status_code=status.HTTP_200_OK,
    response_model=RemoveOrganizationResponse,
)
async def remove_organization(
    organization_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove Organization

    Deletes the organization, or deactivates it when users, licenses or
    onboarding records still reference it.

    Raises:
        - 404 Not Found: ORGANIZATION_NOT_FOUND
    """
    use_case = RemoveOrganizationUseCase(uow)
    result = await use_case.execute(organization_id)

    if result.is_err():
        error = result.error
        if error.code == "ORGANIZATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/organizations/{organization_id}/usage/{resource}/consume",
    status_code=status.HTTP_200_OK,
    response_model=UsageResponse,
)
async def consume_usage(
    organization_id: UUID,
    resource: str,
    amount: int = 1,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Consume Usage

    Called before a capped resource is created. Over-cap requests are refused
    and leave counters untouched.

    Raises:
        - 400 Bad Request: INVALID_RESOURCE, INVALID_AMOUNT
        - 403 Forbidden: LICENSE_INACTIVE
        - 404 Not Found: LICENSE_NOT_FOUND
        - 409 Conflict: LIMIT_EXCEEDED
    """
    use_case = ConsumeUsageUseCase(uow)
    result = await use_case.execute(organization_id, resource, amount)

    if result.is_err():
        _raise_usage_error(result.error)

    return result.value


@router.post(
    "/organizations/{organization_id}/usage/{resource}/release",
    status_code=status.HTTP_200_OK,
    response_model=UsageResponse,
)
async def release_usage(
    organization_id: UUID,
    resource: str,
    amount: int = 1,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Release Usage

    Called after a capped resource is removed. Counters never go below zero.
    """
    use_case = ReleaseUsageUseCase(uow)
    result = await use_case.execute(organization_id, resource, amount)

    if result.is_err():
        _raise_usage_error(result.error)

    return result.value


def _raise_usage_error(error):
    if error.code in ("INVALID_RESOURCE", "INVALID_AMOUNT"):
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    elif error.code == "LICENSE_INACTIVE":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    elif error.code == "LICENSE_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    elif error.code == "LIMIT_EXCEEDED":
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    elif error.code == "USAGE_CONFLICT":
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    raise ServerError(error)


# ============================================================================
# Roles and users
# ============================================================================


class CreateRoleRequest(BaseModel):
    """Create role HTTP request payload"""

    name: str = Field(..., min_length=1, max_length=100)
    portal_type: PortalType
    permissions: List[str] = Field(default_factory=list)
    key: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=255)
    is_system: bool = False


@router.post("/roles", status_code=status.HTTP_201_CREATED, response_model=RoleInfo)
async def create_role(
    request: CreateRoleRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Role

    Raises:
        - 400 Bad Request: INVALID_ROLE_NAME
        - 409 Conflict: ROLE_ALREADY_EXISTS
        - 422 Unprocessable Entity: INVALID_PERMISSION
    """
    use_case = CreateRoleUseCase(uow)
    result = await use_case.execute(
        request.name,
        request.portal_type,
        request.permissions,
        key=request.key,
        description=request.description,
        is_system=request.is_system,
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_ROLE_NAME":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "ROLE_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "INVALID_PERMISSION":
            raise ClientError(
                error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
            )
        raise ServerError(error)

    return result.value


@router.delete("/roles/{role_id}", status_code=status.HTTP_200_OK)
async def delete_role(
    role_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Role

    Raises:
        - 404 Not Found: ROLE_NOT_FOUND
        - 409 Conflict: SYSTEM_ROLE_PROTECTED
    """
    use_case = DeleteRoleUseCase(uow)
    result = await use_case.execute(role_id)

    if result.is_err():
        error = result.error
        if error.code == "ROLE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "SYSTEM_ROLE_PROTECTED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.post("/users", status_code=status.HTTP_201_CREATED, response_model=UserInfo)
async def create_user(
    request: CreateUserCommand,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create User

    Raises:
        - 404 Not Found: ORGANIZATION_NOT_FOUND, ROLE_NOT_FOUND
        - 409 Conflict: EMAIL_ALREADY_EXISTS, ROLE_PORTAL_MISMATCH
    """
    use_case = CreateUserUseCase(uow)
    result = await use_case.execute(request)

    if result.is_err():
        error = result.error
        if error.code in ("ORGANIZATION_NOT_FOUND", "ROLE_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("EMAIL_ALREADY_EXISTS", "ROLE_PORTAL_MISMATCH"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class AssignRoleRequest(BaseModel):
    """Assign role HTTP request payload"""

    role_id: UUID


@router.put(
    "/users/{user_id}/role", status_code=status.HTTP_200_OK, response_model=UserInfo
)
async def assign_role(
    user_id: UUID,
    request: AssignRoleRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Assign Role

    Raises:
        - 404 Not Found: USER_NOT_FOUND, ROLE_NOT_FOUND
        - 409 Conflict: ROLE_PORTAL_MISMATCH
    """
    use_case = AssignRoleUseCase(uow)
    result = await use_case.execute(user_id, request.role_id)

    if result.is_err():
        error = result.error
        if error.code in ("USER_NOT_FOUND", "ROLE_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "ROLE_PORTAL_MISMATCH":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value
