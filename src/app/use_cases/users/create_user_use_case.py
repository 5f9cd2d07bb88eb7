"""
Create User Use Case

Handles creation of portal users by a platform administrator.
"""

import logging

import bcrypt

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User

from .dtos import CreateUserCommand, UserInfo, to_user_info

logger = logging.getLogger(__name__)


class CreateUserUseCase:
    """
    Use case for creating a user.

    Business Rules:
    - Email must be unique (case-insensitive)
    - Password hashed with bcrypt (cost factor 12)
    - Organization, when given, must exist
    - Role, when given, must exist on the user's portal
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: CreateUserCommand) -> Result[UserInfo]:
        email = command.email.lower()

        async with self.uow:
            existing = await self.uow.users.get_by_email(email)
            if existing is not None:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "Email address already registered")
                )

            organization_id = command.organization_id
            if organization_id is not None:
                organization = await self.uow.organizations.get_by_id(organization_id)
                if organization is None:
                    return Return.err(
                        Error("ORGANIZATION_NOT_FOUND", "Organization not found")
                    )

            role_id = command.role_id
            if role_id is not None:
                role = await self.uow.roles.get_by_id(role_id)
                if role is None:
                    return Return.err(Error("ROLE_NOT_FOUND", "Role not found"))
                if role.portal_type != command.portal_type:
                    return Return.err(
                        Error(
                            "ROLE_PORTAL_MISMATCH",
                            f"Role belongs to the {role.portal_type.value} portal",
                        )
                    )

            password_hash = bcrypt.hashpw(
                command.password.encode(), bcrypt.gensalt(12)
            ).decode()

            user = User(
                email=email,
                password_hash=password_hash,
                portal_type=command.portal_type,
                organization_id=organization_id,
                role_id=role_id,
            )
            user = await self.uow.users.create(user)

            await self.uow.commit()

            logger.info("User %s created on %s portal", user.id, user.portal_type.value)

            return Return.ok(to_user_info(user))
