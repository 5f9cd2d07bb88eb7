from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from src.domain.entities import License, LicenseStatus


class ILicenseRepository(ABC):
    """License repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, license_id: UUID) -> Optional[License]:
        """Get license by ID"""
        pass

    @abstractmethod
    async def get_by_organization_id(self, organization_id: UUID) -> List[License]:
        """Get all licenses of an organization, newest first"""
        pass

    @abstractmethod
    async def get_open_by_organization_id(
        self, organization_id: UUID, for_update: bool = False
    ) -> Optional[License]:
        """Get the organization's active or suspended license"""
        pass

    @abstractmethod
    async def create(self, license: License) -> License:
        """Create a new license"""
        pass

    @abstractmethod
    async def update(self, license: License) -> License:
        """Update existing license"""
        pass

    @abstractmethod
    async def apply_usage(
        self,
        license_id: UUID,
        expected_version: int,
        current_usage: Dict[str, int],
        updated_at: datetime,
        statuses: Iterable[LicenseStatus],
    ) -> bool:
        """Write new counters only if version and status still match"""
        pass
