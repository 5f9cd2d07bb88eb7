from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import Invitation, OrganizationType


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[Invitation]:
        """Get invitation by token"""
        pass

    @abstractmethod
    async def get_pending_by_email_and_type(
        self, email: str, organization_type: OrganizationType
    ) -> Optional[Invitation]:
        """Get pending invitation by email and organization type"""
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        pass
