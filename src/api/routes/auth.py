from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.app.services.access_gate import AuthenticatedUser
from src.app.services.email_sender import IEmailSender
from src.app.services.password_service import PasswordService
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    RegisterCommand,
    RegisterUseCase,
    LoginUseCase,
    RefreshTokenUseCase,
    ForgotPasswordUseCase,
    ResetPasswordUseCase,
    ChangePasswordUseCase,
    LogoutUseCase,
    GetMeUseCase,
    AuthResponse,
    RefreshTokenResponse,
    MessageResponse,
    MeResponse,
)
from src.depends import (
    get_current_user,
    get_email_sender,
    get_password_service,
    get_token_service,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    Password strength is enforced by the use case, not here.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    name: Optional[str] = Field(None, max_length=100, description="Display name")


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    passwords: PasswordService = Depends(get_password_service),
    tokens: TokenService = Depends(get_token_service),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Register a new account with the default "user" role.

    Raises:
        - 400 Bad Request: Weak password
        - 409 Conflict: Email already exists
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = RegisterCommand(email=request.email, password=request.password, name=request.name)

    use_case = RegisterUseCase(uow, passwords, tokens, email_sender)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    passwords: PasswordService = Depends(get_password_service),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Authenticate and receive an access/refresh token pair.

    Raises:
        - 401 Unauthorized: Invalid credentials (same message for unknown email)
        - 403 Forbidden: Account deactivated
    """
    use_case = LoginUseCase(uow, passwords, tokens)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., description="Refresh token")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse)
async def refresh(
    request: RefreshRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Rotate the refresh token and issue a new access token.

    Raises:
        - 401 Unauthorized: Invalid, expired, rotated or revoked refresh token
        - 403 Forbidden: Account deactivated
        - 404 Not Found: User no longer exists
    """
    use_case = RefreshTokenUseCase(uow, tokens)
    result = await use_case.execute(request.refresh_token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ForgotPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


@router.post("/forgot-password", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    passwords: PasswordService = Depends(get_password_service),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Request a password reset link.

    Security:
        - No email enumeration (same response for known and unknown emails)
        - Token valid for 1 hour; a new request replaces the previous token
    """
    use_case = ForgotPasswordUseCase(
        uow,
        passwords,
        email_sender,
        reset_token_ttl=timedelta(hours=ApplicationConfig.PASSWORD_RESET_TTL_HOURS),
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., description="Password reset token from email")
    new_password: str = Field(..., description="New password")


@router.post("/reset-password", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    passwords: PasswordService = Depends(get_password_service),
):
    """
    Set a new password using a reset token. Signs the user out everywhere.

    Raises:
        - 400 Bad Request: Weak password, or invalid/expired token
    """
    use_case = ResetPasswordUseCase(uow, passwords)
    result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., description="Current password")
    new_password: str = Field(..., description="New password")


@router.post("/change-password", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    passwords: PasswordService = Depends(get_password_service),
):
    """
    Change the caller's password. Signs the user out everywhere.

    Raises:
        - 400 Bad Request: Weak new password
        - 401 Unauthorized: Not authenticated, or current password incorrect
    """
    use_case = ChangePasswordUseCase(uow, passwords)
    result = await use_case.execute(
        current_user.id, request.current_password, request.new_password
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def logout(
    current_user: AuthenticatedUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Invalidate the caller's refresh token"""
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(current_user.id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def get_me(
    current_user: AuthenticatedUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current user profile and effective permissions.

    Raises:
        - 401 Unauthorized: Invalid or expired access token
    """
    use_case = GetMeUseCase(uow)
    result = await use_case.execute(current_user.id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
