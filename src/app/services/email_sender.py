from abc import ABC, abstractmethod
from typing import Optional


class IEmailSender(ABC):
    """Outbound email collaborator - application layer"""

    @abstractmethod
    async def send_password_reset(self, email: str, reset_token: str) -> None:
        """Deliver a password reset link carrying the plain reset token"""
        pass

    @abstractmethod
    async def send_welcome(self, email: str, name: Optional[str] = None) -> None:
        """Deliver the welcome message after registration"""
        pass
