"""
Get / List Onboarding Use Cases

Read access to onboarding records for reviewers.
"""

from typing import List, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.authorization import load_actor_grants
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import OnboardingStatus
from src.domain.permissions import ReviewAction

from .dtos import OnboardingInfo, to_onboarding_info


class GetOnboardingUseCase:
    """Fetch one onboarding record; the reviewer must be able to view its organization type"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, onboarding_id: UUID, actor_id: UUID
    ) -> Result[OnboardingInfo]:
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

            grants = await load_actor_grants(self.uow, actor_id)
            if grants is None or not grants.can(ReviewAction.view, organization.type):
                return Return.err(
                    Error("UNAUTHORIZED", "Not allowed to view this onboarding")
                )

            return Return.ok(to_onboarding_info(onboarding))


class ListOnboardingsUseCase:
    """
    List onboarding records visible to the reviewer.

    Records of organization types outside the reviewer's scope are left out.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor_id: UUID,
        status: Optional[OnboardingStatus] = None,
        organization_id: Optional[UUID] = None,
    ) -> Result[List[OnboardingInfo]]:
        async with self.uow:
            grants = await load_actor_grants(self.uow, actor_id)
            if grants is None or not grants.can(ReviewAction.view):
                return Return.err(
                    Error("UNAUTHORIZED", "Not allowed to view onboardings")
                )

            records = await self.uow.onboardings.list(
                status=status, organization_id=organization_id
            )

            visible = []
            scope_cache = {}
            for record in records:
                if record.organization_id not in scope_cache:
                    organization = await self.uow.organizations.get_by_id(
                        record.organization_id
                    )
                    scope_cache[record.organization_id] = (
                        organization is not None
                        and grants.can(ReviewAction.view, organization.type)
                    )
                if scope_cache[record.organization_id]:
                    visible.append(to_onboarding_info(record))

            return Return.ok(visible)
