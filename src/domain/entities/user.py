"""
User Entity

Represents an identity that can authenticate and holds exactly one role.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class User(SQLModel, table=True):
    """
    User entity - an account that authenticates with email + password.

    Business Rules:
    - Email must be unique across all users
    - Password stored as argon2id hash (salt and parameters embedded)
    - Exactly one role; defaults to "user" at registration
    - Single active refresh token, overwritten on login/refresh and
      cleared on logout, password change and password reset
    - At most one outstanding password reset token (1 hour expiry)
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=255)
    name: Optional[str] = Field(default=None, max_length=100)

    is_active: bool = Field(default=True)

    role_id: int = Field(foreign_key="roles.id", index=True)

    refresh_token: Optional[str] = Field(default=None, max_length=1024)

    password_reset_token: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=128
    )
    password_reset_expires: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_is_active", "is_active"),)
