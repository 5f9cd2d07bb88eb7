"""
Submit Onboarding Use Case

Handles the invited organization contact filling in the onboarding form.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import Clock, utc_now
from src.domain.entities import (
    AuditEvent,
    InvitationStatus,
    OnboardingRecord,
    OnboardingStatus,
    OrganizationType,
)

from .dtos import OnboardingInfo, SubmitOnboardingCommand, to_onboarding_info

logger = logging.getLogger(__name__)


class SubmitOnboardingUseCase:
    """
    Use case for submitting onboarding data against an invitation token.

    Business Rules:
    - Invitation must exist, be pending and not expired
    - One submission per invitation
    - Customers must request at least one vessel; vendors request none
    - Record is created completed, ready for review
    - Invitation becomes used; organization takes the submitted company name
    """

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, token: str, command: SubmitOnboardingCommand
    ) -> Result[OnboardingInfo]:
        async with self.uow:
            now = self.clock()

            invitation = await self.uow.invitations.get_by_token(token)
            if invitation is None:
                return Return.err(
                    Error("INVALID_INVITATION", "Invitation token is invalid")
                )

            existing = await self.uow.onboardings.get_by_invitation_id(invitation.id)
            if existing is not None:
                return Return.err(
                    Error(
                        "ONBOARDING_ALREADY_SUBMITTED",
                        "Onboarding was already submitted for this invitation",
                    )
                )

            if invitation.status != InvitationStatus.pending:
                return Return.err(
                    Error(
                        "INVALID_INVITATION",
                        f"Invitation is {invitation.status.value}",
                    )
                )

            if invitation.expires_at <= now:
                invitation.status = InvitationStatus.expired
                await self.uow.invitations.update(invitation)
                await self.uow.commit()
                return Return.err(
                    Error("INVALID_INVITATION", "Invitation has expired")
                )

            if invitation.organization_type == OrganizationType.customer:
                if command.vessels is None or command.vessels < 1:
                    return Return.err(
                        Error(
                            "INVALID_ONBOARDING_DATA",
                            "Customers must request at least one vessel",
                        )
                    )
                vessels = command.vessels
            else:
                vessels = None

            organization = await self.uow.organizations.get_by_id(
                invitation.organization_id
            )
            if organization is None:
                return Return.err(
                    Error("ORGANIZATION_NOT_FOUND", "Organization not found")
                )

            onboarding = OnboardingRecord(
                organization_id=organization.id,
                invitation_id=invitation.id,
                company_name=command.company_name.strip(),
                contact_person=command.contact_person.strip(),
                email=command.email.strip().lower(),
                phone=command.phone,
                address=command.address,
                vessels=vessels,
                tax_id=command.tax_id,
                account_name=command.account_name,
                bank_name=command.bank_name,
                iban=command.iban,
                swift=command.swift,
                invoice_email=command.invoice_email,
                billing_address=command.billing_address,
                status=OnboardingStatus.completed,
                submitted_at=now,
                created_at=now,
            )
            onboarding = await self.uow.onboardings.create(onboarding)

            invitation.status = InvitationStatus.used
            invitation.used_at = now
            await self.uow.invitations.update(invitation)

            organization.name = onboarding.company_name
            organization.updated_at = now
            await self.uow.organizations.update(organization)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=organization.id,
                    action="onboarding_submitted",
                    event_metadata={
                        "onboarding_id": str(onboarding.id),
                        "invitation_id": str(invitation.id),
                        "email": onboarding.email,
                    },
                )
            )

            await self.uow.commit()

            logger.info(
                "Onboarding %s submitted for organization %s",
                onboarding.id,
                organization.id,
            )

            return Return.ok(to_onboarding_info(onboarding))
