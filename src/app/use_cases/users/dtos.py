"""
User Use Case DTOs (Data Transfer Objects)
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from src.domain.entities import PortalType, User


class CreateUserCommand(BaseModel):
    """Command for creating a portal user"""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    portal_type: PortalType
    organization_id: Optional[UUID] = None
    role_id: Optional[UUID] = None


class UserInfo(BaseModel):
    """User as returned by management endpoints"""

    id: str
    email: str
    portal_type: str
    organization_id: Optional[str] = None
    role_id: Optional[str] = None
    status: str


def to_user_info(user: User) -> UserInfo:
    return UserInfo(
        id=str(user.id),
        email=user.email,
        portal_type=user.portal_type.value,
        organization_id=str(user.organization_id) if user.organization_id else None,
        role_id=str(user.role_id) if user.role_id else None,
        status=user.status.value,
    )
