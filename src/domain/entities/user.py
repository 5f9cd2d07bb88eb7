"""
User Entity

Actor of a portal, optionally bound to an organization.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import PortalType, UserStatus


class User(SQLModel, table=True):
    """
    User entity - an actor whose permissions come from its assigned role.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash (cost factor 12)
    - organization_id is empty for platform-level (admin/tech) users
    - role_id may point to a deleted role; authorization then grants nothing
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    portal_type: PortalType = Field(nullable=False)
    organization_id: Optional[UUID] = Field(
        default=None, foreign_key="organizations.id", index=True
    )
    # No foreign key: role deletion must not cascade into users
    role_id: Optional[UUID] = Field(default=None, index=True)

    status: UserStatus = Field(default=UserStatus.active)

    # Timestamps
    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime)
    )
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_portal_status", "portal_type", "status"),)
