"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .forgot_password_use_case import ForgotPasswordUseCase, FORGOT_PASSWORD_MESSAGE
from .reset_password_use_case import ResetPasswordUseCase
from .change_password_use_case import ChangePasswordUseCase
from .logout_use_case import LogoutUseCase
from .get_me_use_case import GetMeUseCase
from .dtos import (
    RegisterCommand,
    UserInfo,
    AuthResponse,
    RefreshTokenResponse,
    MessageResponse,
    MeResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "ForgotPasswordUseCase",
    "ResetPasswordUseCase",
    "ChangePasswordUseCase",
    "LogoutUseCase",
    "GetMeUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "AuthResponse",
    "RefreshTokenResponse",
    "MessageResponse",
    "MeResponse",
    # DTOs - Nested Models
    "UserInfo",
    # Constants
    "FORGOT_PASSWORD_MESSAGE",
]
