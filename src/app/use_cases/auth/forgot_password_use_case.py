"""
Forgot Password Use Case

Generates a password reset token and hands it to the email collaborator.
"""

import logging
from datetime import timedelta
from typing import Optional

from src.app.services.email_sender import IEmailSender
from src.app.services.password_service import PasswordService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Error, ErrorKind, Result, Return
from .dtos import MessageResponse

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = (
    "If an account with that email exists, a password reset link has been sent."
)


class ForgotPasswordUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Same response whether or not the email exists (no enumeration)
    - Token is 32 random bytes, hex encoded, valid for 1 hour
    - Stored on the user row: a new request replaces any earlier token
    - Email is sent after commit; delivery failure keeps the token
    """

    def __init__(
        self,
        uow: UnitOfWork,
        passwords: PasswordService,
        email_sender: Optional[IEmailSender] = None,
        reset_token_ttl: timedelta = timedelta(hours=1),
    ):
        self.uow = uow
        self.passwords = passwords
        self.email_sender = email_sender
        self.reset_token_ttl = reset_token_ttl

    async def execute(self, email: str) -> Result[MessageResponse]:
        """
        Execute forgot password use case.

        Args:
            email: User's email address

        Returns:
            Result with the uniform message, or Error(EMAIL_REQUIRED)
        """
        if not email:
            return Return.err(Error("EMAIL_REQUIRED", "Email is required", ErrorKind.bad_request))

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                return Return.ok(MessageResponse(message=FORGOT_PASSWORD_MESSAGE))

            reset_token = self.passwords.generate_reset_token()
            expires_at = utcnow() + self.reset_token_ttl
            await self.uow.users.update_password_reset_token(user.id, reset_token, expires_at)

            await self.uow.commit()

        logger.info("Password reset requested for user %s", user.id)

        if self.email_sender is not None:
            try:
                await self.email_sender.send_password_reset(user.email, reset_token)
            except Exception:
                logger.exception("Failed to send password reset email to user %s", user.id)

        return Return.ok(MessageResponse(message=FORGOT_PASSWORD_MESSAGE))
