"""
OnboardingRecord Entity

Business data submitted by an invited organization, awaiting review.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import OnboardingStatus


class OnboardingRecord(SQLModel, table=True):
    """
    OnboardingRecord entity - one submission per invitation.

    Business Rules:
    - Status only moves forward: pending -> completed -> approved,
      pending|completed -> rejected
    - approved and rejected are terminal
    - rejection_reason is only ever set on rejected records
    - Mutated only by the review workflow, never deleted (audit)
    """

    __tablename__ = "onboarding_records"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    organization_id: UUID = Field(
        foreign_key="organizations.id", nullable=False, index=True
    )
    invitation_id: Optional[UUID] = Field(
        default=None, foreign_key="invitations.id", unique=True
    )

    # Company and contact
    company_name: str = Field(max_length=255)
    contact_person: str = Field(max_length=255)
    email: str = Field(max_length=255, index=True)
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Requested vessel count (customers only)
    vessels: Optional[int] = Field(default=None)

    # Tax and banking
    tax_id: str = Field(max_length=100)
    account_name: str = Field(max_length=255)
    bank_name: str = Field(max_length=255)
    iban: str = Field(max_length=64)
    swift: Optional[str] = Field(default=None, max_length=32)

    # Invoicing
    invoice_email: Optional[str] = Field(default=None, max_length=255)
    billing_address: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Review
    status: OnboardingStatus = Field(default=OnboardingStatus.pending)
    rejection_reason: Optional[str] = Field(default=None, max_length=1000)
    reviewer_id: Optional[UUID] = Field(default=None, foreign_key="users.id")
    reviewed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    submitted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_onboarding_org_status", "organization_id", "status"),
        Index("idx_onboarding_status", "status"),
    )
