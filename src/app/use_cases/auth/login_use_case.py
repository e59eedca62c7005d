"""
Login Use Case

Authenticates with email + password and issues a fresh token pair.
"""

import logging

from src.app.services.password_service import PasswordService
from src.app.services.token_service import TokenClaims, TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import RoleName
from src.libs.result import Error, ErrorKind, Result, Return
from .dtos import AuthResponse, UserInfo

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Unknown email and wrong password produce the same error
    - A dummy hash is verified for unknown emails to keep timing similar
    - User must be active (checked after the password)
    - The new refresh token overwrites any previous one (single session)
    """

    def __init__(self, uow: UnitOfWork, passwords: PasswordService, tokens: TokenService):
        self.uow = uow
        self.passwords = passwords
        self.tokens = tokens

    async def execute(self, email: str, password: str) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with AuthResponse containing user view and tokens, or Error
        """
        if not email or not password:
            return Return.err(
                Error(
                    "CREDENTIALS_REQUIRED",
                    "Email and password are required",
                    ErrorKind.bad_request,
                )
            )

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                await self.passwords.adummy_verify(password)
                logger.info("Login failed: unknown email")
                return Return.err(
                    Error("INVALID_CREDENTIALS", INVALID_CREDENTIALS_MESSAGE, ErrorKind.unauthorized)
                )

            if not await self.passwords.averify(password, user.password_hash):
                logger.info("Login failed: wrong password for user %s", user.id)
                return Return.err(
                    Error("INVALID_CREDENTIALS", INVALID_CREDENTIALS_MESSAGE, ErrorKind.unauthorized)
                )

            if not user.is_active:
                return Return.err(
                    Error("USER_INACTIVE", "Account is deactivated", ErrorKind.forbidden)
                )

            role = await self.uow.roles.get_by_id(user.role_id)
            role_name = role.name if role is not None else RoleName.user.value

            pair = self.tokens.issue_pair(
                TokenClaims(user_id=user.id, email=user.email, role=role_name)
            )
            await self.uow.users.update_refresh_token(user.id, pair.refresh_token)

            await self.uow.commit()

            logger.info("User %s logged in", user.id)

            return Return.ok(
                AuthResponse(
                    user=UserInfo(id=user.id, email=user.email, name=user.name, role=role_name),
                    access_token=pair.access_token,
                    refresh_token=pair.refresh_token,
                )
            )
