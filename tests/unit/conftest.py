from datetime import datetime
from uuid import uuid4

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.domain.entities import (
    OnboardingRecord,
    OnboardingStatus,
    Organization,
    OrganizationType,
    PortalType,
    Role,
    User,
)

FIXED_NOW = datetime(2025, 3, 1, 12, 0)

REVIEWER_PERMISSIONS = [
    "onboardingView",
    "onboardingManage",
    "licensesView",
    "licensesIssue",
    "licensesRevoke",
    "customerOrgsManage",
    "vendorOrgsManage",
]


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.organizations = MagicMock()
    uow.organizations.get_by_id = AsyncMock()
    uow.organizations.create = AsyncMock(side_effect=lambda o: o)
    uow.organizations.update = AsyncMock(side_effect=lambda o: o)
    uow.organizations.delete = AsyncMock()

    uow.onboardings = MagicMock()
    uow.onboardings.get_by_id = AsyncMock()
    uow.onboardings.get_by_invitation_id = AsyncMock(return_value=None)
    uow.onboardings.list = AsyncMock(return_value=[])
    uow.onboardings.count_by_organization_id = AsyncMock(return_value=0)
    uow.onboardings.create = AsyncMock(side_effect=lambda o: o)
    uow.onboardings.transition = AsyncMock(return_value=True)

    uow.licenses = MagicMock()
    uow.licenses.get_by_id = AsyncMock()
    uow.licenses.get_by_organization_id = AsyncMock(return_value=[])
    uow.licenses.get_open_by_organization_id = AsyncMock(return_value=None)
    uow.licenses.create = AsyncMock(side_effect=lambda lic: lic)
    uow.licenses.update = AsyncMock(side_effect=lambda lic: lic)
    uow.licenses.apply_usage = AsyncMock(return_value=True)

    uow.roles = MagicMock()
    uow.roles.get_by_id = AsyncMock()
    uow.roles.get_by_key = AsyncMock(return_value=None)
    uow.roles.create = AsyncMock(side_effect=lambda r: r)
    uow.roles.delete = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda u: u)
    uow.users.update = AsyncMock(side_effect=lambda u: u)
    uow.users.count_by_organization_id = AsyncMock(return_value=0)

    uow.invitations = MagicMock()
    uow.invitations.get_by_token = AsyncMock()
    uow.invitations.get_pending_by_email_and_type = AsyncMock(return_value=None)
    uow.invitations.create = AsyncMock(side_effect=lambda i: i)
    uow.invitations.update = AsyncMock(side_effect=lambda i: i)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()
    return uow


@pytest.fixture
def make_reviewer(mock_uow):
    """Register an admin-portal user with the given permission keys on the mock uow"""

    def _make(permissions=None, portal_type=PortalType.admin):
        role = Role(
            id=uuid4(),
            name="Reviewer",
            key="reviewer",
            portal_type=portal_type,
            permissions=list(REVIEWER_PERMISSIONS if permissions is None else permissions),
        )
        user = User(
            id=uuid4(),
            email="reviewer@platform.io",
            password_hash="x" * 60,
            portal_type=portal_type,
            role_id=role.id,
        )
        mock_uow.users.get_by_id.return_value = user
        mock_uow.roles.get_by_id.return_value = role
        return user

    return _make


@pytest.fixture
def customer_org():
    return Organization(
        id=uuid4(),
        name="Ocean Freight Ltd",
        type=OrganizationType.customer,
        portal_type=PortalType.customer,
        is_active=False,
    )


@pytest.fixture
def make_onboarding():
    def _make(organization, status=OnboardingStatus.completed, vessels=3):
        return OnboardingRecord(
            id=uuid4(),
            organization_id=organization.id,
            company_name=organization.name,
            contact_person="Jane Doe",
            email="jane@oceanfreight.com",
            vessels=vessels,
            tax_id="TX-1",
            account_name="Ocean Freight Ltd",
            bank_name="First Bank",
            iban="GB00TEST0000000000",
            status=status,
            submitted_at=FIXED_NOW,
        )

    return _make
