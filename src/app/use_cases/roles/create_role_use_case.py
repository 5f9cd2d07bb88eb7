"""
Create Role Use Case
"""

import logging
from typing import List, Optional

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, PortalType, Role
from src.domain.permissions import normalize_label, unknown_permissions

from .dtos import RoleInfo, to_role_info

logger = logging.getLogger(__name__)


class CreateRoleUseCase:
    """
    Use case for defining a role on a portal.

    Business Rules:
    - Every permission key must belong to the portal's vocabulary
    - Role key is unique per portal (defaults to the normalized name)
    - Duplicate keys in the request are collapsed, order kept
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        name: str,
        portal_type: PortalType,
        permissions: List[str],
        key: Optional[str] = None,
        description: Optional[str] = None,
        is_system: bool = False,
    ) -> Result[RoleInfo]:
        name = (name or "").strip()
        if not name:
            return Return.err(Error("INVALID_ROLE_NAME", "Role name cannot be empty"))

        role_key = normalize_label(key or name)

        unknown = unknown_permissions(portal_type, permissions)
        if unknown:
            return Return.err(
                Error(
                    "INVALID_PERMISSION",
                    f"Unknown {portal_type.value} permissions: {', '.join(unknown)}",
                )
            )

        async with self.uow:
            existing = await self.uow.roles.get_by_key(role_key, portal_type)
            if existing is not None:
                return Return.err(
                    Error(
                        "ROLE_ALREADY_EXISTS",
                        f"Role '{role_key}' already exists on the {portal_type.value} portal",
                    )
                )

            role = Role(
                name=name,
                key=role_key,
                portal_type=portal_type,
                permissions=list(dict.fromkeys(permissions)),
                description=description,
                is_system=is_system,
            )
            role = await self.uow.roles.create(role)

            await self.uow.audit_events.create(
                AuditEvent(
                    action="role_created",
                    event_metadata={
                        "role_id": str(role.id),
                        "key": role_key,
                        "portal_type": portal_type.value,
                        "permissions": role.permissions,
                    },
                )
            )

            await self.uow.commit()

            logger.info("Role %s created on %s portal", role_key, portal_type.value)

            return Return.ok(to_role_info(role))
