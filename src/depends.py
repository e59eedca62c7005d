from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional, Sequence

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.logging_email_sender import LoggingEmailSender
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import raise_for_error
from src.app.services.access_gate import AccessGate, AccessPolicy, AuthenticatedUser
from src.app.services.email_sender import IEmailSender
from src.app.services.password_service import PasswordService
from src.app.services.permission_resolver import PermissionResolver
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWorkFactory

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

password_service = PasswordService(
    time_cost=ApplicationConfig.ARGON2_TIME_COST,
    memory_cost=ApplicationConfig.ARGON2_MEMORY_COST,
    parallelism=ApplicationConfig.ARGON2_PARALLELISM,
)

token_service = TokenService(
    secret=ApplicationConfig.JWT_SECRET,
    access_ttl=timedelta(minutes=ApplicationConfig.JWT_ACCESS_TTL_MINUTES),
    refresh_ttl=timedelta(days=ApplicationConfig.JWT_REFRESH_TTL_DAYS),
    algorithm=ApplicationConfig.JWT_ALGORITHM,
)

email_sender = LoggingEmailSender(ApplicationConfig.FRONTEND_URL)

# Missing credentials reach the gate as None so the error body stays uniform
security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@asynccontextmanager
async def unit_of_work_scope():
    """Unit of work on a dedicated session, closed on exit"""
    async with AsyncSessionLocal() as session:
        async with SqlAlchemyUnitOfWork(session) as uow:
            yield uow


def get_uow_factory() -> UnitOfWorkFactory:
    return unit_of_work_scope


def get_password_service() -> PasswordService:
    return password_service


def get_token_service() -> TokenService:
    return token_service


def get_email_sender() -> IEmailSender:
    return email_sender


def get_permission_resolver(
    uow_factory: UnitOfWorkFactory = Depends(get_uow_factory),
) -> PermissionResolver:
    return PermissionResolver(uow_factory)


def get_access_gate(
    tokens: TokenService = Depends(get_token_service),
    uow_factory: UnitOfWorkFactory = Depends(get_uow_factory),
    resolver: PermissionResolver = Depends(get_permission_resolver),
) -> AccessGate:
    return AccessGate(tokens, uow_factory, resolver)


def _bearer_token(credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    return credentials.credentials if credentials is not None else None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    gate: AccessGate = Depends(get_access_gate),
) -> AuthenticatedUser:
    """
    Dependency to authenticate the caller from the Authorization header.

    Args:
        credentials: Bearer token from Authorization header, None if absent

    Returns:
        AuthenticatedUser loaded fresh from the database

    Raises:
        ClientError: 401 if the header is missing, the token is expired or
        invalid, or the user is missing or inactive
    """
    result = await gate.authenticate(_bearer_token(credentials))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    gate: AccessGate = Depends(get_access_gate),
) -> Optional[AuthenticatedUser]:
    """Like get_current_user, but anonymous callers get None instead of 401"""
    return await gate.authenticate_optional(_bearer_token(credentials))


def _require(policy: AccessPolicy):
    async def dependency(
        current_user: AuthenticatedUser = Depends(get_current_user),
        gate: AccessGate = Depends(get_access_gate),
    ) -> AuthenticatedUser:
        result = await gate.authorize(current_user, policy)
        if result.is_err():
            raise_for_error(result.error)
        return current_user

    return dependency


def require_permission(permission: str):
    """Route guard: caller's role must grant this permission"""
    return _require(AccessPolicy.permission(permission))


def require_any_permission(permissions: Sequence[str]):
    """Route guard: caller's role must grant at least one of the permissions"""
    return _require(AccessPolicy.any_of(*permissions))


def require_all_permissions(permissions: Sequence[str]):
    """Route guard: caller's role must grant every permission"""
    return _require(AccessPolicy.all_of(*permissions))


def require_role(role_name: str):
    """Route guard: caller's role name must equal role_name"""
    return _require(AccessPolicy.role(role_name))
