"""
Invitation Entity

Onboarding invitation issued to a prospective organization contact.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import InvitationStatus, OrganizationType


class Invitation(SQLModel, table=True):
    """
    Invitation entity - grants one onboarding submission for an organization.

    Business Rules:
    - Issued together with an inactive organization
    - Expires after INVITATION_TTL_DAYS (7 by default)
    - Token is single-use, cryptographically secure
    - One pending invitation per (email, organization_type)
    """

    __tablename__ = "invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    organization_id: UUID = Field(
        foreign_key="organizations.id", nullable=False, index=True
    )
    organization_type: OrganizationType = Field(nullable=False)
    email: str = Field(max_length=255, nullable=False, index=True)

    token: str = Field(unique=True, index=True, max_length=64)

    status: InvitationStatus = Field(default=InvitationStatus.pending)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime))
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_invitation_expires_at", "expires_at"),
        Index("idx_invitation_email_type", "email", "organization_type"),
        Index("idx_invitation_status", "status"),
    )
