"""
Reject Onboarding Use Case

Handles rejection of a submitted onboarding by a reviewer.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.authorization import load_actor_grants
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import Clock, utc_now
from src.domain.entities import AuditEvent, OnboardingStatus
from src.domain.permissions import ReviewAction

from .approve_onboarding_use_case import REVIEWABLE_STATUSES
from .dtos import RejectOnboardingResponse, to_onboarding_info

logger = logging.getLogger(__name__)


class RejectOnboardingUseCase:
    """
    Use case for rejecting an onboarding submission.

    Business Rules:
    - Reviewer needs onboardingManage plus the org-management key for the
      organization's type
    - Only pending or completed records can be rejected
    - The reason is optional; blank reasons are not stored
    - No license is created or changed
    """

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, onboarding_id: UUID, reviewer_id: UUID, reason: Optional[str] = None
    ) -> Result[RejectOnboardingResponse]:
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
            if grants is None or not grants.can(ReviewAction.reject, organization.type):
                return Return.err(
                    Error(
                        "UNAUTHORIZED",
                        f"Not allowed to reject {organization.type.value} onboardings",
                    )
                )

            if onboarding.status not in REVIEWABLE_STATUSES:
                return Return.err(
                    Error(
                        "INVALID_TRANSITION",
                        f"Cannot reject a {onboarding.status.value} onboarding",
                    )
                )

            rejection_reason = reason.strip() if reason else None
            if not rejection_reason:
                rejection_reason = None

            now = self.clock()
            won = await self.uow.onboardings.transition(
                onboarding.id,
                REVIEWABLE_STATUSES,
                OnboardingStatus.rejected,
                reviewer_id=reviewer_id,
                reviewed_at=now,
                rejection_reason=rejection_reason,
            )
            if not won:
                await self.uow.rollback()
                return Return.err(
                    Error("INVALID_TRANSITION", "Onboarding was reviewed concurrently")
                )

            onboarding.status = OnboardingStatus.rejected
            onboarding.reviewer_id = reviewer_id
            onboarding.reviewed_at = now
            onboarding.rejection_reason = rejection_reason

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=organization.id,
                    actor_id=reviewer_id,
                    action="onboarding_rejected",
                    event_metadata={
                        "onboarding_id": str(onboarding.id),
                        "reason": rejection_reason,
                    },
                )
            )

            await self.uow.commit()

            logger.info("Onboarding %s rejected by %s", onboarding.id, reviewer_id)

            return Return.ok(
                RejectOnboardingResponse(onboarding=to_onboarding_info(onboarding))
            )
