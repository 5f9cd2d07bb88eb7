from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID

from src.domain.entities import OnboardingRecord, OnboardingStatus


class IOnboardingRepository(ABC):
    """OnboardingRecord repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, onboarding_id: UUID) -> Optional[OnboardingRecord]:
        """Get onboarding record by ID"""
        pass

    @abstractmethod
    async def get_by_invitation_id(
        self, invitation_id: UUID
    ) -> Optional[OnboardingRecord]:
        """Get the onboarding record submitted for an invitation"""
        pass

    @abstractmethod
    async def list(
        self,
        status: Optional[OnboardingStatus] = None,
        organization_id: Optional[UUID] = None,
    ) -> List[OnboardingRecord]:
        """List onboarding records, newest first"""
        pass

    @abstractmethod
    async def count_by_organization_id(self, organization_id: UUID) -> int:
        """Count onboarding records of an organization"""
        pass

    @abstractmethod
    async def create(self, onboarding: OnboardingRecord) -> OnboardingRecord:
        """Create a new onboarding record"""
        pass

    @abstractmethod
    async def transition(
        self,
        onboarding_id: UUID,
        from_statuses: Iterable[OnboardingStatus],
        to_status: OnboardingStatus,
        reviewer_id: UUID,
        reviewed_at: datetime,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        """
        Compare-and-set the status.

        Returns False, changing nothing, when the stored status is no longer
        one of from_statuses.
        """
        pass
