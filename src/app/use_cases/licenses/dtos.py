"""
License Use Case DTOs (Data Transfer Objects)

All Command and Response classes for license provisioning.
"""

from typing import Dict, Optional

from pydantic import BaseModel

from src.domain.entities import License


class LicenseInfo(BaseModel):
    """License with its caps and live counters"""

    id: str
    license_key: str
    organization_id: str
    organization_type: str
    status: str
    usage_limits: Dict[str, int]
    current_usage: Dict[str, int]
    issued_at: str
    expires_at: Optional[str] = None


class UsageResponse(BaseModel):
    """Response for consume/release usage use cases"""

    license_id: str
    resource: str
    current: int
    limit: Optional[int] = None


def to_license_info(license: License) -> LicenseInfo:
    return LicenseInfo(
        id=str(license.id),
        license_key=license.license_key,
        organization_id=str(license.organization_id),
        organization_type=license.organization_type.value,
        status=license.status.value,
        usage_limits=dict(license.usage_limits or {}),
        current_usage=dict(license.current_usage or {}),
        issued_at=license.issued_at.isoformat(),
        expires_at=license.expires_at.isoformat() if license.expires_at else None,
    )
