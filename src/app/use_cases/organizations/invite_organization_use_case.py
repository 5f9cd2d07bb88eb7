"""
Invite Organization Use Case

Handles inviting a prospective customer or vendor to onboard.
"""

import logging
import secrets
from datetime import timedelta
from uuid import UUID

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.authorization import load_actor_grants
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import Clock, utc_now
from src.domain.entities import (
    AuditEvent,
    Invitation,
    Organization,
    OrganizationType,
    PortalType,
)
from src.domain.permissions import ReviewAction

from .dtos import InviteOrganizationResponse, to_organization_info

logger = logging.getLogger(__name__)


class InviteOrganizationUseCase:
    """
    Use case for issuing an onboarding invitation.

    Business Rules:
    - Inviter needs onboardingManage plus the org-management key for the type
    - Prevent duplicate pending invitations for the same email and type
    - Creates the organization inactive; approval activates it
    - Invitation expires after INVITATION_TTL_DAYS
    - Generates cryptographically secure token
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Clock = utc_now,
        invitation_ttl_days: int = ApplicationConfig.INVITATION_TTL_DAYS,
    ):
        self.uow = uow
        self.clock = clock
        self.invitation_ttl_days = invitation_ttl_days

    async def execute(
        self,
        inviter_id: UUID,
        name: str,
        email: str,
        organization_type: OrganizationType,
    ) -> Result[InviteOrganizationResponse]:
        """
        Execute invite organization use case.

        Args:
            inviter_id: User issuing the invitation
            name: Provisional organization name
            email: Contact email the invitation is sent to
            organization_type: customer or vendor

        Returns:
            Result with InviteOrganizationResponse DTO, or Error
        """
        email = email.strip().lower()
        name = (name or "").strip() or email

        async with self.uow:
            grants = await load_actor_grants(self.uow, inviter_id)
            if grants is None or not grants.can(ReviewAction.invite, organization_type):
                return Return.err(
                    Error(
                        "UNAUTHORIZED",
                        f"Not allowed to invite {organization_type.value} organizations",
                    )
                )

            pending = await self.uow.invitations.get_pending_by_email_and_type(
                email, organization_type
            )
            if pending is not None:
                return Return.err(
                    Error(
                        "INVITE_ALREADY_EXISTS",
                        "A pending invitation already exists for this email",
                    )
                )

            now = self.clock()
            organization = Organization(
                name=name,
                type=organization_type,
                portal_type=PortalType(organization_type.value),
                is_active=False,
                created_at=now,
                updated_at=now,
            )
            organization = await self.uow.organizations.create(organization)

            invitation = Invitation(
                organization_id=organization.id,
                organization_type=organization_type,
                email=email,
                token=secrets.token_urlsafe(32),
                expires_at=now + timedelta(days=self.invitation_ttl_days),
                created_at=now,
            )
            invitation = await self.uow.invitations.create(invitation)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=organization.id,
                    actor_id=inviter_id,
                    action="organization_invited",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "email": email,
                        "type": organization_type.value,
                    },
                )
            )

            await self.uow.commit()

            logger.info(
                "Invitation %s issued for %s organization %s",
                invitation.id,
                organization_type.value,
                organization.id,
            )

            return Return.ok(
                InviteOrganizationResponse(
                    organization=to_organization_info(organization),
                    invitation_id=str(invitation.id),
                    email=email,
                    token=invitation.token,
                    expires_at=invitation.expires_at.isoformat(),
                )
            )
