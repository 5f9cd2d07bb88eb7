from datetime import datetime
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.license_repository import ILicenseRepository
from src.domain.entities import License, LicenseStatus


class LicenseRepository(ILicenseRepository):
    """License repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, license_id: UUID) -> Optional[License]:
        """Get license by ID"""
        stmt = select(License).where(License.id == license_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_organization_id(self, organization_id: UUID) -> List[License]:
        """Get all licenses of an organization, newest first"""
        stmt = (
            select(License)
            .where(License.organization_id == organization_id)
            .order_by(License.issued_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_open_by_organization_id(
        self, organization_id: UUID, for_update: bool = False
    ) -> Optional[License]:
        """Get the organization's active or suspended license"""
        stmt = select(License).where(
            License.organization_id == organization_id,
            License.status.in_([LicenseStatus.active, LicenseStatus.suspended]),
        )
        if for_update:
            # Row lock on databases that support it; no-op on SQLite
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def create(self, license: License) -> License:
        """Create a new license"""
        self.session.add(license)
        await self.session.flush()
        await self.session.refresh(license)
        return license

    async def update(self, license: License) -> License:
        """Update existing license"""
        self.session.add(license)
        await self.session.flush()
        await self.session.refresh(license)
        return license

    async def apply_usage(
        self,
        license_id: UUID,
        expected_version: int,
        current_usage: Dict[str, int],
        updated_at: datetime,
        statuses: Iterable[LicenseStatus],
    ) -> bool:
        """Compare-and-set the counters on version; False if another write landed first"""
        stmt = (
            update(License)
            .where(
                License.id == license_id,
                License.version == expected_version,
                License.status.in_(list(statuses)),
            )
            .values(
                current_usage=current_usage,
                version=expected_version + 1,
                updated_at=updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
