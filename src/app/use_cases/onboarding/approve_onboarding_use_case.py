"""
Approve Onboarding Use Case

Approves a submitted onboarding and provisions the organization's license
in the same transaction.
"""

import logging
from uuid import UUID

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.authorization import load_actor_grants
from src.app.services.license_guard import can_issue_license
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import Clock, utc_now
from src.domain.entities import (
    AuditEvent,
    LicenseStatus,
    OnboardingRecord,
    OnboardingStatus,
)
from src.domain.licensing import build_license, default_usage_limits
from src.domain.permissions import ReviewAction

from .dtos import ReviewOnboardingResponse, to_onboarding_info

logger = logging.getLogger(__name__)

REVIEWABLE_STATUSES = (OnboardingStatus.pending, OnboardingStatus.completed)


class ApproveOnboardingUseCase:
    """
    Use case for approving an onboarding submission.

    Business Rules:
    - Reviewer needs licensesIssue plus the org-management key for the
      organization's type, re-read from storage
    - pending|completed -> approved; rejected records cannot be approved
    - Approving an approved record is a no-op returning the existing license
    - Exactly one license per approval: an existing active license is
      adopted, a suspended one blocks the approval (LICENSE_SUSPENDED)
    - Status change, license, organization activation and audit events
      commit together or not at all
    - The status is compare-and-set, so concurrent approvals provision once
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Clock = utc_now,
        license_term_days: int = ApplicationConfig.LICENSE_TERM_DAYS,
    ):
        self.uow = uow
        self.clock = clock
        self.license_term_days = license_term_days

    async def execute(
        self, onboarding_id: UUID, reviewer_id: UUID
    ) -> Result[ReviewOnboardingResponse]:
        """
        Execute approve onboarding use case.

        Args:
            onboarding_id: Onboarding record to approve
            reviewer_id: User performing the review

        Returns:
            Result with the approved record and the organization's license id, or Error
        """
        async with self.uow:
            onboarding = await self.uow.onboardings.get_by_id(onboarding_id)
            if onboarding is None:
                return Return.err(
                    Error("ONBOARDING_NOT_FOUND", "Onboarding record not found")
                )

            organization = await self.uow.organizations.get_by_id(
                onboarding.organization_id
            )
            if organization is None:
                return Return.err(
                    Error("ORGANIZATION_NOT_FOUND", "Organization not found")
                )

            grants = await load_actor_grants(self.uow, reviewer_id)
            if grants is None or not grants.can(ReviewAction.approve, organization.type):
                return Return.err(
                    Error(
                        "UNAUTHORIZED",
                        f"Not allowed to approve {organization.type.value} onboardings",
                    )
                )

            if onboarding.status == OnboardingStatus.approved:
                return await self._replay(onboarding)

            if onboarding.status not in REVIEWABLE_STATUSES:
                return Return.err(
                    Error(
                        "INVALID_TRANSITION",
                        f"Cannot approve a {onboarding.status.value} onboarding",
                    )
                )

            # Decide on the license before touching the record
            existing_license = None
            if not await can_issue_license(self.uow, organization.id):
                existing_license = await self.uow.licenses.get_open_by_organization_id(
                    organization.id, for_update=True
                )
                if existing_license.status != LicenseStatus.active:
                    return Return.err(
                        Error(
                            "LICENSE_SUSPENDED",
                            "Organization holds a suspended license; reinstate or revoke it first",
                        )
                    )

            now = self.clock()
            won = await self.uow.onboardings.transition(
                onboarding.id,
                REVIEWABLE_STATUSES,
                OnboardingStatus.approved,
                reviewer_id=reviewer_id,
                reviewed_at=now,
            )
            if not won:
                # Another review committed first; report what it decided
                await self.uow.rollback()
                current = await self.uow.onboardings.get_by_id(onboarding_id)
                if current is not None and current.status == OnboardingStatus.approved:
                    return await self._replay(current)
                return Return.err(
                    Error("INVALID_TRANSITION", "Onboarding was reviewed concurrently")
                )

            onboarding.status = OnboardingStatus.approved
            onboarding.reviewer_id = reviewer_id
            onboarding.reviewed_at = now

            if existing_license is None:
                license = build_license(
                    organization.id,
                    organization.type,
                    default_usage_limits(organization.type, onboarding.vessels),
                    now,
                    self.license_term_days,
                )
                license = await self.uow.licenses.create(license)
                issued = True
            else:
                license = existing_license
                issued = False

            organization.is_active = True
            organization.updated_at = now
            await self.uow.organizations.update(organization)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=organization.id,
                    actor_id=reviewer_id,
                    action="onboarding_approved",
                    event_metadata={
                        "onboarding_id": str(onboarding.id),
                        "license_id": str(license.id),
                        "license_issued": issued,
                    },
                )
            )
            if issued:
                await self.uow.audit_events.create(
                    AuditEvent(
                        organization_id=organization.id,
                        actor_id=reviewer_id,
                        action="license_issued",
                        event_metadata={
                            "license_id": str(license.id),
                            "license_key": license.license_key,
                            "usage_limits": license.usage_limits,
                            "source": "onboarding_approval",
                        },
                    )
                )

            await self.uow.commit()

            logger.info(
                "Onboarding %s approved by %s, license %s (%s)",
                onboarding.id,
                reviewer_id,
                license.id,
                "issued" if issued else "adopted",
            )

            return Return.ok(
                ReviewOnboardingResponse(
                    onboarding=to_onboarding_info(onboarding),
                    license_id=str(license.id),
                )
            )

    async def _replay(
        self, onboarding: OnboardingRecord
    ) -> Result[ReviewOnboardingResponse]:
        license = await self.uow.licenses.get_open_by_organization_id(
            onboarding.organization_id
        )
        logger.info("Onboarding %s already approved, returning existing result", onboarding.id)
        return Return.ok(
            ReviewOnboardingResponse(
                onboarding=to_onboarding_info(onboarding),
                license_id=str(license.id) if license else None,
            )
        )
