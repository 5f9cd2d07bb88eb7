from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import PortalType, Role


class IRoleRepository(ABC):
    """Role repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, role_id: UUID) -> Optional[Role]:
        """Get role by ID"""
        pass

    @abstractmethod
    async def get_by_key(self, key: str, portal_type: PortalType) -> Optional[Role]:
        """Get role by key within a portal"""
        pass

    @abstractmethod
    async def create(self, role: Role) -> Role:
        """Create a new role"""
        pass

    @abstractmethod
    async def delete(self, role: Role) -> None:
        """Delete a role"""
        pass
