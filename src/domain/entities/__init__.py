"""
Onboarding Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    InvitationStatus,
    LicenseStatus,
    OnboardingStatus,
    OrganizationType,
    PortalType,
    UserStatus,
)

# Export all entities
from .organization import Organization
from .user import User
from .role import Role
from .invitation import Invitation
from .onboarding_record import OnboardingRecord
from .license import License
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "InvitationStatus",
    "LicenseStatus",
    "OnboardingStatus",
    "OrganizationType",
    "PortalType",
    "UserStatus",
    # Entities
    "Organization",
    "User",
    "Role",
    "Invitation",
    "OnboardingRecord",
    "License",
    "AuditEvent",
]
