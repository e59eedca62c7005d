from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from src.domain.entities import User


@dataclass(frozen=True)
class UserFilters:
    """Substring filters for listing users; None fields are ignored"""

    email: Optional[str] = None
    name: Optional[str] = None
    is_active: Optional[bool] = None


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_page(
        self, filters: Optional[UserFilters] = None, offset: int = 0, limit: int = 10
    ) -> List[User]:
        """Get one page of users matching the filters, ordered by ID"""
        pass

    @abstractmethod
    async def count(self, filters: Optional[UserFilters] = None) -> int:
        """Count users matching the filters"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises DuplicateEntryError if the email is taken."""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user. Raises DuplicateEntryError if the email is taken."""
        pass

    @abstractmethod
    async def delete(self, user_id: int) -> None:
        """Remove the user row"""
        pass

    @abstractmethod
    async def email_exists(self, email: str) -> bool:
        """Check whether an account already uses this email"""
        pass

    @abstractmethod
    async def get_by_reset_token(self, token: str, now: datetime) -> Optional[User]:
        """Get user by password reset token whose expiry is after `now`"""
        pass

    @abstractmethod
    async def update_password(self, user_id: int, password_hash: str) -> None:
        """Set a new password hash and clear any pending reset token"""
        pass

    @abstractmethod
    async def update_refresh_token(self, user_id: int, refresh_token: Optional[str]) -> None:
        """Store (or clear with None) the user's single active refresh token"""
        pass

    @abstractmethod
    async def update_password_reset_token(
        self, user_id: int, token: Optional[str], expires_at: Optional[datetime]
    ) -> None:
        """Store (or clear) the password reset token and its expiry"""
        pass

    @abstractmethod
    async def update_role(self, user_id: int, role_id: int) -> None:
        """Assign a different role to the user"""
        pass
