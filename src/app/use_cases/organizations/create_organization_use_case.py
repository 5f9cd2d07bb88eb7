"""
Create Organization Use Case

Direct creation of an active organization by a platform administrator.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import Clock, utc_now
from src.domain.entities import AuditEvent, Organization, OrganizationType, PortalType

from .dtos import OrganizationInfo, to_organization_info

logger = logging.getLogger(__name__)


class CreateOrganizationUseCase:
    """
    Use case for creating an organization without going through onboarding.

    Business Rules:
    - Name must not be blank
    - Portal follows the organization type
    - Created active; no license is issued here
    """

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, name: str, organization_type: OrganizationType
    ) -> Result[OrganizationInfo]:
        name = (name or "").strip()
        if not name:
            return Return.err(
                Error("INVALID_ORGANIZATION_NAME", "Organization name cannot be empty")
            )

        async with self.uow:
            now = self.clock()
            organization = Organization(
                name=name,
                type=organization_type,
                portal_type=PortalType(organization_type.value),
                is_active=True,
                created_at=now,
                updated_at=now,
            )
            organization = await self.uow.organizations.create(organization)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=organization.id,
                    action="organization_created",
                    event_metadata={"name": name, "type": organization_type.value},
                )
            )

            await self.uow.commit()

            logger.info(
                "Organization %s (%s) created", organization.id, organization_type.value
            )

            return Return.ok(to_organization_info(organization))
