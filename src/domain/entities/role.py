"""
Role Entity

Named bundle of permissions assigned to users.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class Role(SQLModel, table=True):
    """
    Role entity - many users to one role, many-to-many with permissions
    through RolePermission.

    Business Rules:
    - Name must be unique
    - "admin" and "user" are seeded system roles and cannot be deleted
    - Deletion is soft (is_active=False); an inactive role grants nothing
    """

    __tablename__ = "roles"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=100)
    description: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
