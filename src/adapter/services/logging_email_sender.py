import logging
from typing import Optional

from src.app.services.email_sender import IEmailSender

logger = logging.getLogger(__name__)


class LoggingEmailSender(IEmailSender):
    """
    Development mailer: writes outgoing messages to the log instead of
    delivering them.
    """

    def __init__(self, frontend_url: str):
        self.frontend_url = frontend_url.rstrip("/")

    async def send_password_reset(self, email: str, reset_token: str) -> None:
        reset_link = f"{self.frontend_url}/reset-password?token={reset_token}"
        logger.info(
            "Password reset email | to=%s | subject=%s | link=%s",
            email,
            "Password Reset",
            reset_link,
        )

    async def send_welcome(self, email: str, name: Optional[str] = None) -> None:
        logger.info(
            "Welcome email | to=%s | subject=%s | name=%s",
            email,
            "Welcome",
            name or email,
        )
