"""
Change License Status Use Case

Suspends, reinstates, expires or revokes a license.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.authorization import load_actor_grants
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import Clock, utc_now
from src.domain.entities import AuditEvent, LicenseStatus
from src.domain.permissions import ReviewAction

from .dtos import LicenseInfo, to_license_info

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    LicenseStatus.active: {
        LicenseStatus.suspended,
        LicenseStatus.expired,
        LicenseStatus.revoked,
    },
    LicenseStatus.suspended: {
        LicenseStatus.active,
        LicenseStatus.expired,
        LicenseStatus.revoked,
    },
}


class ChangeLicenseStatusUseCase:
    """
    Use case for moving a license through its lifecycle.

    Business Rules:
    - Actor needs licensesRevoke plus the org-management key for the type
    - active <-> suspended; active|suspended -> expired|revoked
    - expired and revoked are final
    """

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, actor_id: UUID, license_id: UUID, new_status: LicenseStatus
    ) -> Result[LicenseInfo]:
        async with self.uow:
            license = await self.uow.licenses.get_by_id(license_id)
            if license is None:
                return Return.err(Error("LICENSE_NOT_FOUND", "License not found"))

            grants = await load_actor_grants(self.uow, actor_id)
            if grants is None or not grants.can(
                ReviewAction.license_status, license.organization_type
            ):
                return Return.err(
                    Error("UNAUTHORIZED", "Not allowed to change this license")
                )

            if new_status not in ALLOWED_TRANSITIONS.get(license.status, set()):
                return Return.err(
                    Error(
                        "INVALID_TRANSITION",
                        f"Cannot move license from {license.status.value} to {new_status.value}",
                    )
                )

            previous = license.status
            license.status = new_status
            license.updated_at = self.clock()
            license = await self.uow.licenses.update(license)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=license.organization_id,
                    actor_id=actor_id,
                    action="license_status_changed",
                    event_metadata={
                        "license_id": str(license.id),
                        "from": previous.value,
                        "to": new_status.value,
                    },
                )
            )

            await self.uow.commit()

            logger.info(
                "License %s moved from %s to %s by %s",
                license.id,
                previous.value,
                new_status.value,
                actor_id,
            )

            return Return.ok(to_license_info(license))
