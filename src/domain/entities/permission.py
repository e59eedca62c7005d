"""
Permission Entity

Atomic capability named "<resource>.<action>".
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class Permission(SQLModel, table=True):
    """
    Permission entity.

    Business Rules:
    - Name must be unique
    - Names are opaque: "users.manage" does not imply "users.create"
    - Deletion is soft (is_active=False); inactive permissions never match
    """

    __tablename__ = "permissions"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=100)
    description: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
