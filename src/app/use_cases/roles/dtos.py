"""
Role Use Case DTOs (Data Transfer Objects)
"""

from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import Role


class ResolvedPermissions(BaseModel):
    """Analytics role class and grants resolved from a free-text label"""

    role_label: Optional[str] = None
    role: str
    granted_permissions: List[str]


class RoleInfo(BaseModel):
    """Stored role with its portal permission keys"""

    id: str
    name: str
    key: str
    portal_type: str
    permissions: List[str]
    description: Optional[str] = None
    is_system: bool


def to_role_info(role: Role) -> RoleInfo:
    return RoleInfo(
        id=str(role.id),
        name=role.name,
        key=role.key,
        portal_type=role.portal_type.value,
        permissions=list(role.permissions or []),
        description=role.description,
        is_system=role.is_system,
    )
