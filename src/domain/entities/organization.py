"""
Organization Entity

Customer or vendor organization that onboarding and license records attach to.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import OrganizationType, PortalType


class Organization(SQLModel, table=True):
    """
    Organization entity - parent aggregate of onboarding and license records.

    Business Rules:
    - type is immutable after creation
    - Created active by an admin, or inactive when an onboarding invitation is issued
    - Activated when its onboarding is approved
    - Soft-deactivated instead of deleted once it owns users or licenses
    - At most one open (active/suspended) license at any time
    """

    __tablename__ = "organizations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)

    type: OrganizationType = Field(nullable=False)
    portal_type: PortalType = Field(nullable=False)

    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_organization_type_active", "type", "is_active"),
        Index("idx_organization_name_type", "name", "type"),
    )
