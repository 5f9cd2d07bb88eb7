"""
Organization Directory Use Cases

Creation, invitation and removal of customer and vendor organizations.
"""

from .create_organization_use_case import CreateOrganizationUseCase
from .dtos import InviteOrganizationResponse, OrganizationInfo, RemoveOrganizationResponse
from .invite_organization_use_case import InviteOrganizationUseCase
from .remove_organization_use_case import RemoveOrganizationUseCase

__all__ = [
    "CreateOrganizationUseCase",
    "InviteOrganizationUseCase",
    "RemoveOrganizationUseCase",
    "OrganizationInfo",
    "InviteOrganizationResponse",
    "RemoveOrganizationResponse",
]
