"""
Login Use Case

Handles user authentication and returns a portal-scoped JWT.
"""

import logging

import bcrypt

from libs.result import Error, Result, Return
from src.api.utils.jwt import generate_jwt
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import Clock, utc_now
from src.domain.entities import UserStatus

from .dtos import LoginResponse

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - User must have status=active
    - JWT carries identity only (user, portal, organization), never grants
    - Updates user.last_login_at
    """

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse containing the access token, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email.lower())

            # Always perform hash check even if user not found
            if user is None:
                bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(12))
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            password_valid = bcrypt.checkpw(
                password.encode(), user.password_hash.encode()
            )

            if not password_valid:
                logger.warning("Failed login for user %s", user.id)
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if user.status == UserStatus.disabled:
                return Return.err(Error("USER_DISABLED", "User account is disabled"))

            user.last_login_at = self.clock()
            await self.uow.users.update(user)
            await self.uow.commit()

            access_token = generate_jwt(
                user.id, user.portal_type.value, user.organization_id
            )

            return Return.ok(
                LoginResponse(
                    access_token=access_token,
                    user_id=str(user.id),
                    portal_type=user.portal_type.value,
                    organization_id=(
                        str(user.organization_id) if user.organization_id else None
                    ),
                )
            )
