"""
Delete Role Use Case
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent

logger = logging.getLogger(__name__)


class DeleteRoleUseCase:
    """
    Use case for deleting a role.

    Business Rules:
    - System roles cannot be deleted
    - Users keep their role_id; authorization then resolves to no permissions
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, role_id: UUID) -> Result[dict]:
        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found"))

            if role.is_system:
                return Return.err(
                    Error("SYSTEM_ROLE_PROTECTED", "System roles cannot be deleted")
                )

            await self.uow.roles.delete(role)

            await self.uow.audit_events.create(
                AuditEvent(
                    action="role_deleted",
                    event_metadata={
                        "role_id": str(role_id),
                        "key": role.key,
                        "portal_type": role.portal_type.value,
                    },
                )
            )

            await self.uow.commit()

            logger.info("Role %s deleted", role_id)

            return Return.ok({"role_id": str(role_id), "status": "deleted"})
