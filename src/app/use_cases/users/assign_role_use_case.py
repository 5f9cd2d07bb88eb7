"""
Assign Role Use Case
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent

from .dtos import UserInfo, to_user_info

logger = logging.getLogger(__name__)


class AssignRoleUseCase:
    """
    Use case for assigning a role to a user.

    Business Rules:
    - Role must belong to the user's portal
    - Takes effect on the next authorized call (grants are never cached in tokens)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, role_id: UUID) -> Result[UserInfo]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found"))

            if role.portal_type != user.portal_type:
                return Return.err(
                    Error(
                        "ROLE_PORTAL_MISMATCH",
                        f"Role belongs to the {role.portal_type.value} portal, "
                        f"user to the {user.portal_type.value} portal",
                    )
                )

            previous_role_id = user.role_id
            user.role_id = role.id
            user = await self.uow.users.update(user)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=user.organization_id,
                    actor_id=None,
                    action="role_assigned",
                    event_metadata={
                        "user_id": str(user.id),
                        "role_id": str(role.id),
                        "previous_role_id": (
                            str(previous_role_id) if previous_role_id else None
                        ),
                    },
                )
            )

            await self.uow.commit()

            logger.info("Role %s assigned to user %s", role.key, user.id)

            return Return.ok(to_user_info(user))
