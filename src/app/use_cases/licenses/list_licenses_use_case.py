"""
List Licenses Use Case
"""

from typing import List
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.authorization import load_actor_grants
from src.app.services.unit_of_work import UnitOfWork
from src.domain.permissions import ReviewAction

from .dtos import LicenseInfo, to_license_info


class ListLicensesUseCase:
    """License history of one organization, newest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_id: UUID, organization_id: UUID
    ) -> Result[List[LicenseInfo]]:
        async with self.uow:
            organization = await self.uow.organizations.get_by_id(organization_id)
            if organization is None:
                return Return.err(
                    Error("ORGANIZATION_NOT_FOUND", "Organization not found")
                )

            grants = await load_actor_grants(self.uow, actor_id)
            if grants is None or not grants.can(
                ReviewAction.view_licenses, organization.type
            ):
                return Return.err(
                    Error("UNAUTHORIZED", "Not allowed to view these licenses")
                )

            licenses = await self.uow.licenses.get_by_organization_id(organization_id)
            return Return.ok([to_license_info(license) for license in licenses])
