"""
Role Entity

Named set of portal permission keys.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import PortalType


class Role(SQLModel, table=True):
    """
    Role entity - permission keys granted to every user assigned to it.

    Business Rules:
    - Keys come from the closed vocabulary of the role's portal
    - permissions may be empty, never null
    - (key, portal_type) is unique
    - Deleting a role leaves assigned users with no permissions
    """

    __tablename__ = "roles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)
    key: str = Field(max_length=100)

    portal_type: PortalType = Field(nullable=False)
    permissions: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    description: Optional[str] = Field(default=None, max_length=255)
    is_system: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_role_key_portal", "key", "portal_type", unique=True),
    )
