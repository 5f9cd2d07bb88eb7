"""
Onboarding Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class OrganizationType(str, Enum):
    """Kind of organization; fixed at creation"""

    customer = "customer"
    vendor = "vendor"


class PortalType(str, Enum):
    """Front-end surface an actor or organization belongs to"""

    tech = "tech"
    admin = "admin"
    customer = "customer"
    vendor = "vendor"


class OnboardingStatus(str, Enum):
    """Onboarding review lifecycle"""

    pending = "pending"
    completed = "completed"
    approved = "approved"
    rejected = "rejected"


class LicenseStatus(str, Enum):
    """License lifecycle"""

    active = "active"
    expired = "expired"
    suspended = "suspended"
    revoked = "revoked"


class UserStatus(str, Enum):
    """User account status"""

    active = "active"
    disabled = "disabled"


class InvitationStatus(str, Enum):
    """Onboarding invitation status"""

    pending = "pending"
    used = "used"
    expired = "expired"
