"""
Reset Password Use Case

Consumes a password reset token and sets a new password.
"""

import logging

from src.app.services.password_service import PasswordService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Error, ErrorKind, Result, Return
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for confirming a password reset.

    Business Rules:
    - New password must pass the strength policy
    - Token must match a user and not be expired; expired and unknown
      tokens produce the same error
    - Token is single-use: cleared together with the password update
    - Stored refresh token is cleared, forcing re-login everywhere
    """

    def __init__(self, uow: UnitOfWork, passwords: PasswordService):
        self.uow = uow
        self.passwords = passwords

    async def execute(self, token: str, new_password: str) -> Result[MessageResponse]:
        """
        Execute reset password use case.

        Args:
            token: Password reset token (plain text from email)
            new_password: New password to set

        Returns:
            Result with confirmation message, or Error

        Errors:
            - RESET_FIELDS_REQUIRED: token or password missing
            - WEAK_PASSWORD: password fails the strength policy
            - INVALID_RESET_TOKEN: token not found or expired
        """
        if not token or not new_password:
            return Return.err(
                Error(
                    "RESET_FIELDS_REQUIRED",
                    "Token and new password are required",
                    ErrorKind.bad_request,
                )
            )

        strength = self.passwords.validate_strength(new_password)
        if not strength.valid:
            return Return.err(Error("WEAK_PASSWORD", strength.reason, ErrorKind.bad_request))

        async with self.uow:
            user = await self.uow.users.get_by_reset_token(token, utcnow())

            if user is None:
                return Return.err(
                    Error(
                        "INVALID_RESET_TOKEN",
                        "Invalid or expired password reset token",
                        ErrorKind.bad_request,
                    )
                )

            password_hash = await self.passwords.ahash(new_password)
            await self.uow.users.update_password(user.id, password_hash)
            await self.uow.users.update_refresh_token(user.id, None)

            await self.uow.commit()

            logger.info("Password reset completed for user %s", user.id)

            return Return.ok(
                MessageResponse(message="Password has been reset successfully")
            )
