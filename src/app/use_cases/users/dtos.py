"""
User Management DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import User


# ============================================================================
# Command DTOs
# ============================================================================


class CreateUserCommand(BaseModel):
    """Account created by an administrator. role_id defaults to the "user" role."""

    email: str
    password: str
    name: Optional[str] = None
    role_id: Optional[int] = None


class UpdateUserCommand(BaseModel):
    """Fields left as None are not changed"""

    email: Optional[str] = None
    name: Optional[str] = None
    is_active: Optional[bool] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserResponse(BaseModel):
    """Administrative user view. Secrets (hash, tokens) are never included."""

    id: int
    email: str
    name: Optional[str] = None
    role_id: int
    role: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User, role_name: Optional[str]) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            role_id=user.role_id,
            role=role_name,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class UserPage(BaseModel):
    data: List[UserResponse]
    pagination: Pagination


class SeedAdminResponse(BaseModel):
    user_id: int
    created: bool
    promoted: bool
