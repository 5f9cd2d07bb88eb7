"""
Organization Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the organization directory.
"""

from pydantic import BaseModel

from src.domain.entities import Organization


class OrganizationInfo(BaseModel):
    """Organization directory entry"""

    id: str
    name: str
    type: str
    portal_type: str
    is_active: bool
    created_at: str


class InviteOrganizationResponse(BaseModel):
    """Response for invite organization use case"""

    organization: OrganizationInfo
    invitation_id: str
    email: str
    token: str
    expires_at: str


class RemoveOrganizationResponse(BaseModel):
    """Response for remove organization use case"""

    organization_id: str
    status: str  # "deleted" or "deactivated"


def to_organization_info(organization: Organization) -> OrganizationInfo:
    return OrganizationInfo(
        id=str(organization.id),
        name=organization.name,
        type=organization.type.value,
        portal_type=organization.portal_type.value,
        is_active=organization.is_active,
        created_at=organization.created_at.isoformat(),
    )
