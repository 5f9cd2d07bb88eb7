"""
Issue License Use Case

Manual license issuance for an organization outside the onboarding flow.
"""

import logging
from typing import Dict, Optional
from uuid import UUID

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.authorization import load_actor_grants
from src.app.services.license_guard import can_issue_license
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import Clock, utc_now
from src.domain.entities import AuditEvent
from src.domain.licensing import USAGE_RESOURCES, build_license, default_usage_limits
from src.domain.permissions import ReviewAction

from .dtos import LicenseInfo, to_license_info

logger = logging.getLogger(__name__)


class IssueLicenseUseCase:
    """
    Use case for issuing a license by hand.

    Business Rules:
    - Issuer needs licensesIssue plus the org-management key for the type
    - Refused while the organization holds an active or suspended license
    - Caps default to the organization type's defaults
    - Caps must use known resource keys and be non-negative
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
        self,
        issuer_id: UUID,
        organization_id: UUID,
        usage_limits: Optional[Dict[str, int]] = None,
    ) -> Result[LicenseInfo]:
        if usage_limits is not None:
            unknown = [k for k in usage_limits if k not in USAGE_RESOURCES]
            if unknown:
                return Return.err(
                    Error(
                        "INVALID_USAGE_LIMITS",
                        f"Unknown usage resources: {', '.join(unknown)}",
                    )
                )
            if any(value < 0 for value in usage_limits.values()):
                return Return.err(
                    Error("INVALID_USAGE_LIMITS", "Usage limits cannot be negative")
                )

        async with self.uow:
            organization = await self.uow.organizations.get_by_id(organization_id)
            if organization is None:
                return Return.err(
                    Error("ORGANIZATION_NOT_FOUND", "Organization not found")
                )

            grants = await load_actor_grants(self.uow, issuer_id)
            if grants is None or not grants.can(ReviewAction.issue, organization.type):
                return Return.err(
                    Error(
                        "UNAUTHORIZED",
                        f"Not allowed to issue licenses to {organization.type.value} organizations",
                    )
                )

            if not await can_issue_license(self.uow, organization.id):
                return Return.err(
                    Error(
                        "LICENSE_ALREADY_EXISTS",
                        "Organization already holds an active or suspended license",
                    )
                )

            if usage_limits is None:
                usage_limits = default_usage_limits(organization.type)

            license = build_license(
                organization.id,
                organization.type,
                usage_limits,
                self.clock(),
                self.license_term_days,
            )
            license = await self.uow.licenses.create(license)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=organization.id,
                    actor_id=issuer_id,
                    action="license_issued",
                    event_metadata={
                        "license_id": str(license.id),
                        "license_key": license.license_key,
                        "usage_limits": license.usage_limits,
                        "source": "manual",
                    },
                )
            )

            await self.uow.commit()

            logger.info(
                "License %s issued to organization %s by %s",
                license.id,
                organization.id,
                issuer_id,
            )

            return Return.ok(to_license_info(license))
