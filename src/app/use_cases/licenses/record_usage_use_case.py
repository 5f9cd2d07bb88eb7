"""
Record Usage Use Cases

Guarded counter updates for services that create or remove capped resources
(users, vessels, items, employees, business units).

Counters are written with a compare-and-set on the license version, so two
callers reading the same counters cannot both succeed. The loser re-reads and
re-checks capacity.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import Clock, utc_now
from src.domain.entities import LicenseStatus
from src.domain.licensing import (
    OPEN_LICENSE_STATUSES,
    USAGE_RESOURCES,
    has_capacity,
    is_usable,
    with_usage,
)

from .dtos import UsageResponse

logger = logging.getLogger(__name__)

MAX_USAGE_ATTEMPTS = 10


class _UsageUseCase:
    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now):
        self.uow = uow
        self.clock = clock

    def _validate(self, resource: str, amount: int):
        if resource not in USAGE_RESOURCES:
            return Error(
                "INVALID_RESOURCE",
                f"Unknown resource: {resource}. Must be one of: {', '.join(USAGE_RESOURCES)}",
            )
        if amount < 1:
            return Error("INVALID_AMOUNT", "Amount must be at least 1")
        return None

    def _conflict(self, organization_id: UUID, resource: str):
        logger.warning(
            "Gave up updating %s usage for organization %s after %s attempts",
            resource,
            organization_id,
            MAX_USAGE_ATTEMPTS,
        )
        return Return.err(
            Error("USAGE_CONFLICT", "License usage is changing too quickly, retry")
        )


class ConsumeUsageUseCase(_UsageUseCase):
    """
    Reserve capacity before a capped resource is created.

    Business Rules:
    - Organization needs an active, unexpired license
    - Over-cap requests fail with LIMIT_EXCEEDED and leave counters untouched
    - Resources missing from usage_limits are uncapped
    - Capacity is re-checked after every lost write
    """

    async def execute(
        self, organization_id: UUID, resource: str, amount: int = 1
    ) -> Result[UsageResponse]:
        error = self._validate(resource, amount)
        if error:
            return Return.err(error)

        async with self.uow:
            for _ in range(MAX_USAGE_ATTEMPTS):
                license = await self.uow.licenses.get_open_by_organization_id(
                    organization_id
                )
                if license is None:
                    return Return.err(
                        Error("LICENSE_NOT_FOUND", "Organization has no license")
                    )

                now = self.clock()
                if not is_usable(license, now):
                    return Return.err(
                        Error("LICENSE_INACTIVE", "License is suspended or expired")
                    )

                limit = license.usage_limits.get(resource)
                if not has_capacity(license, resource, amount):
                    logger.warning(
                        "Usage limit reached for %s on license %s (%s/%s)",
                        resource,
                        license.id,
                        license.current_usage.get(resource, 0),
                        limit,
                    )
                    return Return.err(
                        Error(
                            "LIMIT_EXCEEDED",
                            f"{resource} limit of {limit} reached",
                        )
                    )

                usage = with_usage(license, resource, amount)
                won = await self.uow.licenses.apply_usage(
                    license.id,
                    license.version,
                    usage,
                    now,
                    (LicenseStatus.active,),
                )
                if won:
                    await self.uow.commit()
                    return Return.ok(
                        UsageResponse(
                            license_id=str(license.id),
                            resource=resource,
                            current=usage[resource],
                            limit=limit,
                        )
                    )

                await self.uow.rollback()

            return self._conflict(organization_id, resource)


class ReleaseUsageUseCase(_UsageUseCase):
    """Give capacity back after a capped resource is removed; floors at zero"""

    async def execute(
        self, organization_id: UUID, resource: str, amount: int = 1
    ) -> Result[UsageResponse]:
        error = self._validate(resource, amount)
        if error:
            return Return.err(error)

        async with self.uow:
            for _ in range(MAX_USAGE_ATTEMPTS):
                license = await self.uow.licenses.get_open_by_organization_id(
                    organization_id
                )
                if license is None:
                    return Return.err(
                        Error("LICENSE_NOT_FOUND", "Organization has no license")
                    )

                usage = with_usage(license, resource, -amount)
                won = await self.uow.licenses.apply_usage(
                    license.id,
                    license.version,
                    usage,
                    self.clock(),
                    OPEN_LICENSE_STATUSES,
                )
                if won:
                    await self.uow.commit()
                    return Return.ok(
                        UsageResponse(
                            license_id=str(license.id),
                            resource=resource,
                            current=usage[resource],
                            limit=license.usage_limits.get(resource),
                        )
                    )

                await self.uow.rollback()

            return self._conflict(organization_id, resource)
