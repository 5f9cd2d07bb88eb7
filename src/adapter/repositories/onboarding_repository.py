from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID

from sqlmodel import func, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.onboarding_repository import IOnboardingRepository
from src.domain.entities import OnboardingRecord, OnboardingStatus


class OnboardingRepository(IOnboardingRepository):
    """OnboardingRecord repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, onboarding_id: UUID) -> Optional[OnboardingRecord]:
        """Get onboarding record by ID"""
        stmt = select(OnboardingRecord).where(OnboardingRecord.id == onboarding_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_invitation_id(
        self, invitation_id: UUID
    ) -> Optional[OnboardingRecord]:
        """Get the onboarding record submitted for an invitation"""
        stmt = select(OnboardingRecord).where(
            OnboardingRecord.invitation_id == invitation_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list(
        self,
        status: Optional[OnboardingStatus] = None,
        organization_id: Optional[UUID] = None,
    ) -> List[OnboardingRecord]:
        """List onboarding records, newest first"""
        stmt = select(OnboardingRecord)
        if status is not None:
            stmt = stmt.where(OnboardingRecord.status == status)
        if organization_id is not None:
            stmt = stmt.where(OnboardingRecord.organization_id == organization_id)
        stmt = stmt.order_by(OnboardingRecord.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_organization_id(self, organization_id: UUID) -> int:
        """Count onboarding records of an organization"""
        stmt = (
            select(func.count())
            .select_from(OnboardingRecord)
            .where(OnboardingRecord.organization_id == organization_id)
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, onboarding: OnboardingRecord) -> OnboardingRecord:
        """Create a new onboarding record"""
        self.session.add(onboarding)
        await self.session.flush()
        await self.session.refresh(onboarding)
        return onboarding

    async def transition(
        self,
        onboarding_id: UUID,
        from_statuses: Iterable[OnboardingStatus],
        to_status: OnboardingStatus,
        reviewer_id: UUID,
        reviewed_at: datetime,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        """Compare-and-set the status; False if another call got there first"""
        stmt = (
            update(OnboardingRecord)
            .where(
                OnboardingRecord.id == onboarding_id,
                OnboardingRecord.status.in_(list(from_statuses)),
            )
            .values(
                status=to_status,
                reviewer_id=reviewer_id,
                reviewed_at=reviewed_at,
                rejection_reason=rejection_reason,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
