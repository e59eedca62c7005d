"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import List, Optional
from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    Contains only business-relevant data (no HTTP concerns).
    """

    email: str
    password: str
    name: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """User view returned to clients. Never carries the password hash."""

    id: int
    email: str
    name: Optional[str] = None
    role: str


class AuthResponse(BaseModel):
    """Response for register and login use cases"""

    user: UserInfo
    access_token: str
    refresh_token: str


class RefreshTokenResponse(BaseModel):
    """Response for refresh token use case"""

    access_token: str
    refresh_token: str


class MessageResponse(BaseModel):
    """Response for operations that only report an outcome"""

    message: str


class MeResponse(BaseModel):
    """Response for the current-user lookup"""

    user: UserInfo
    is_active: bool
    permissions: List[str]
