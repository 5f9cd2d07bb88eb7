"""
License Entity

Per-organization entitlement with usage caps and live counters.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import LicenseStatus, OrganizationType


class License(SQLModel, table=True):
    """
    License entity - bounds how much of each resource an organization may create.

    Business Rules:
    - current_usage[k] <= usage_limits[k] for every key present in usage_limits
    - A key missing from usage_limits is uncapped
    - At most one active or suspended license per organization
      (partial unique index below)
    - Counters are moved by resource-creation collaborators, never by onboarding
    - version goes up on every counter write; writers compare-and-set on it
    """

    __tablename__ = "licenses"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    license_key: str = Field(unique=True, index=True, max_length=64)

    organization_id: UUID = Field(
        foreign_key="organizations.id", nullable=False, index=True
    )
    organization_type: OrganizationType = Field(nullable=False)

    status: LicenseStatus = Field(default=LicenseStatus.active)

    usage_limits: dict = Field(default_factory=dict, sa_column=Column(JSON))
    current_usage: dict = Field(default_factory=dict, sa_column=Column(JSON))
    version: int = Field(default=1, nullable=False)

    # Timestamps
    issued_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime)
    )
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_license_org_status", "organization_id", "status"),
        Index("idx_license_status_expires", "status", "expires_at"),
        Index(
            "uq_license_open_per_org",
            "organization_id",
            unique=True,
            sqlite_where=text("status IN ('active', 'suspended')"),
            postgresql_where=text("status IN ('active', 'suspended')"),
        ),
    )
