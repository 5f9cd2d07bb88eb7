"""
License Provisioning Rules

Derivation of default entitlements for newly approved organizations, license
construction, and the usage-cap checks offered to resource-creation
collaborators. Pure functions: callers inject the clock.
"""

import uuid
from datetime import datetime, timedelta
from typing import Dict, Iterable, Optional
from uuid import UUID

from src.domain.entities import License, LicenseStatus, OrganizationType

USAGE_RESOURCES = ("users", "vessels", "items", "employees", "businessUnits")

# Statuses that count as "the organization already holds a license"
OPEN_LICENSE_STATUSES = frozenset({LicenseStatus.active, LicenseStatus.suspended})

DEFAULT_VESSELS = 10
MIN_VESSELS = 1
MIN_USERS = 10
USERS_PER_VESSEL = 2
DEFAULT_ITEMS = 1000
DEFAULT_EMPLOYEES = 50
DEFAULT_BUSINESS_UNITS = 5
VENDOR_USERS = 10


def default_usage_limits(
    organization_type: OrganizationType, requested_vessels: Optional[int] = None
) -> Dict[str, int]:
    """
    Default caps for a new license.

    Customers get a vessels cap from the requested count (at least 1, 10 when
    nothing was requested) and two users per vessel with a floor of 10.
    Vendors get no vessels cap.
    """
    if organization_type == OrganizationType.customer:
        if requested_vessels is None:
            vessels = DEFAULT_VESSELS
        else:
            vessels = max(MIN_VESSELS, int(requested_vessels))
        return {
            "users": max(MIN_USERS, vessels * USERS_PER_VESSEL),
            "vessels": vessels,
            "items": DEFAULT_ITEMS,
            "employees": DEFAULT_EMPLOYEES,
            "businessUnits": DEFAULT_BUSINESS_UNITS,
        }
    return {
        "users": VENDOR_USERS,
        "items": DEFAULT_ITEMS,
        "employees": DEFAULT_EMPLOYEES,
        "businessUnits": DEFAULT_BUSINESS_UNITS,
    }


def generate_license_key() -> str:
    return f"LIC-{uuid.uuid4().hex.upper()}"


def build_license(
    organization_id: UUID,
    organization_type: OrganizationType,
    usage_limits: Dict[str, int],
    now: datetime,
    term_days: Optional[int] = 365,
) -> License:
    """Construct an active license with zeroed counters for every capped resource."""
    for resource in usage_limits:
        if resource not in USAGE_RESOURCES:
            raise ValueError(f"Unknown usage resource: {resource}")
    return License(
        license_key=generate_license_key(),
        organization_id=organization_id,
        organization_type=organization_type,
        status=LicenseStatus.active,
        usage_limits=dict(usage_limits),
        current_usage={resource: 0 for resource in usage_limits},
        issued_at=now,
        expires_at=now + timedelta(days=term_days) if term_days else None,
        created_at=now,
        updated_at=now,
    )


def blocks_issuance(licenses: Iterable[License]) -> bool:
    """True if any license is still open (active or suspended)."""
    return any(license.status in OPEN_LICENSE_STATUSES for license in licenses)


def is_usable(license: License, now: datetime) -> bool:
    """Active and not past its expiry."""
    if license.status != LicenseStatus.active:
        return False
    if license.expires_at is None:
        return True
    return license.expires_at > now


def has_capacity(license: License, resource: str, amount: int = 1) -> bool:
    """Whether amount more units fit under the resource cap (uncapped if absent)."""
    limit = (license.usage_limits or {}).get(resource)
    if limit is None:
        return True
    current = (license.current_usage or {}).get(resource, 0)
    return current + amount <= limit


def with_usage(license: License, resource: str, delta: int) -> Dict[str, int]:
    """New counters dict with delta applied to resource, floored at zero."""
    usage = dict(license.current_usage or {})
    usage[resource] = max(0, usage.get(resource, 0) + delta)
    return usage
