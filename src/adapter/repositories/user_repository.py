from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, func
from sqlmodel import col, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.integrity import flush_unique
from src.app.repositories.user_repository import IUserRepository, UserFilters
from src.domain.base import utcnow
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_page(
        self, filters: Optional[UserFilters] = None, offset: int = 0, limit: int = 10
    ) -> List[User]:
        """Page of users matching the filters, oldest first"""
        stmt = (
            self._filtered(select(User), filters)
            .order_by(User.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count(self, filters: Optional[UserFilters] = None) -> int:
        stmt = self._filtered(select(func.count()).select_from(User), filters)
        return await self.session.scalar(stmt)

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await flush_unique(self.session)
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        user.updated_at = utcnow()
        self.session.add(user)
        await flush_unique(self.session)
        await self.session.refresh(user)
        return user

    async def delete(self, user_id: int) -> None:
        await self.session.execute(delete(User).where(User.id == user_id))
        await self.session.flush()

    async def email_exists(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def get_by_reset_token(self, token: str, now: datetime) -> Optional[User]:
        """Get user by reset token; expired tokens behave as not found"""
        stmt = select(User).where(
            User.password_reset_token == token,
            User.password_reset_expires > now,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def update_password(self, user_id: int, password_hash: str) -> None:
        await self._update_fields(
            user_id,
            password_hash=password_hash,
            password_reset_token=None,
            password_reset_expires=None,
        )

    async def update_refresh_token(self, user_id: int, refresh_token: Optional[str]) -> None:
        await self._update_fields(user_id, refresh_token=refresh_token)

    async def update_password_reset_token(
        self, user_id: int, token: Optional[str], expires_at: Optional[datetime]
    ) -> None:
        await self._update_fields(
            user_id, password_reset_token=token, password_reset_expires=expires_at
        )

    async def update_role(self, user_id: int, role_id: int) -> None:
        await self._update_fields(user_id, role_id=role_id)

    async def _update_fields(self, user_id: int, **values) -> None:
        # Single-row update keyed by id; last writer wins
        stmt = update(User).where(User.id == user_id).values(updated_at=utcnow(), **values)
        await self.session.execute(stmt)
        await self.session.flush()

    @staticmethod
    def _filtered(stmt, filters: Optional[UserFilters]):
        if filters is None:
            return stmt
        if filters.email:
            stmt = stmt.where(col(User.email).contains(filters.email))
        if filters.name:
            stmt = stmt.where(col(User.name).contains(filters.name))
        if filters.is_active is not None:
            stmt = stmt.where(User.is_active == filters.is_active)
        return stmt
