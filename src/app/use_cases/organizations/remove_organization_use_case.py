"""
Remove Organization Use Case

Deletes an organization, or deactivates it once other records depend on it.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import Clock, utc_now
from src.domain.entities import AuditEvent

from .dtos import RemoveOrganizationResponse

logger = logging.getLogger(__name__)


class RemoveOrganizationUseCase:
    """
    Use case for removing an organization.

    Business Rules:
    - Hard delete only while no users, licenses or onboarding records reference it
    - Otherwise the organization is deactivated and its records kept for audit
    """

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(self, organization_id: UUID) -> Result[RemoveOrganizationResponse]:
        async with self.uow:
            organization = await self.uow.organizations.get_by_id(organization_id)
            if organization is None:
                return Return.err(
                    Error("ORGANIZATION_NOT_FOUND", "Organization not found")
                )

            users = await self.uow.users.count_by_organization_id(organization.id)
            licenses = await self.uow.licenses.get_by_organization_id(organization.id)
            onboardings = await self.uow.onboardings.count_by_organization_id(
                organization.id
            )

            if users == 0 and not licenses and onboardings == 0:
                await self.uow.organizations.delete(organization)
                status = "deleted"
            else:
                organization.is_active = False
                organization.updated_at = self.clock()
                await self.uow.organizations.update(organization)
                await self.uow.audit_events.create(
                    AuditEvent(
                        organization_id=organization.id,
                        action="organization_deactivated",
                        event_metadata={
                            "users": users,
                            "licenses": len(licenses),
                            "onboardings": onboardings,
                        },
                    )
                )
                status = "deactivated"

            await self.uow.commit()

            logger.info("Organization %s %s", organization_id, status)

            return Return.ok(
                RemoveOrganizationResponse(
                    organization_id=str(organization_id), status=status
                )
            )
