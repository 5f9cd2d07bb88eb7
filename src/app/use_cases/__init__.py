"""
Use Cases

Organized into domain folders:
- auth/: Login
- onboarding/: Submission and review workflow
- licenses/: Issuance, lifecycle and usage counters
- organizations/: Organization directory
- roles/: Role resolution and role management
- users/: User management

Import from subdirectories for better organization.
"""

from .auth import LoginUseCase
from .licenses import (
    ChangeLicenseStatusUseCase,
    ConsumeUsageUseCase,
    IssueLicenseUseCase,
    ListLicensesUseCase,
    ReleaseUsageUseCase,
)
from .onboarding import (
    ApproveOnboardingUseCase,
    GetOnboardingUseCase,
    ListOnboardingsUseCase,
    RejectOnboardingUseCase,
    SubmitOnboardingUseCase,
)
from .organizations import (
    CreateOrganizationUseCase,
    InviteOrganizationUseCase,
    RemoveOrganizationUseCase,
)
from .roles import CreateRoleUseCase, DeleteRoleUseCase, ResolvePermissionsUseCase
from .users import AssignRoleUseCase, CreateUserUseCase

__all__ = [
    # Auth
    "LoginUseCase",
    # Onboarding
    "SubmitOnboardingUseCase",
    "ApproveOnboardingUseCase",
    "RejectOnboardingUseCase",
    "GetOnboardingUseCase",
    "ListOnboardingsUseCase",
    # Licenses
    "IssueLicenseUseCase",
    "ChangeLicenseStatusUseCase",
    "ConsumeUsageUseCase",
    "ReleaseUsageUseCase",
    "ListLicensesUseCase",
    # Organizations
    "CreateOrganizationUseCase",
    "InviteOrganizationUseCase",
    "RemoveOrganizationUseCase",
    # Roles
    "ResolvePermissionsUseCase",
    "CreateRoleUseCase",
    "DeleteRoleUseCase",
    # Users
    "CreateUserUseCase",
    "AssignRoleUseCase",
]
