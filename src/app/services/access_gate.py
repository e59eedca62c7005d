"""
Access Control Gate

Request-time authentication and authorization, independent of the web
framework. The FastAPI dependencies in src/depends.py delegate here.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from src.app.services.permission_resolver import PermissionResolver
from src.app.services.token_service import (
    ACCESS_TOKEN_TYPE,
    TokenExpiredError,
    TokenError,
    TokenService,
)
from src.app.services.unit_of_work import UnitOfWorkFactory
from src.libs.result import Error, ErrorKind, Result, Return

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity attached to a request after authentication"""

    id: int
    email: str
    role: Optional[str]
    role_id: int


class PolicyMode(str, Enum):
    permission = "permission"
    any = "any"
    all = "all"
    role = "role"


@dataclass(frozen=True)
class AccessPolicy:
    """Requirement declared by a route"""

    mode: PolicyMode
    names: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def permission(cls, name: str) -> "AccessPolicy":
        return cls(PolicyMode.permission, (name,))

    @classmethod
    def any_of(cls, *names: str) -> "AccessPolicy":
        return cls(PolicyMode.any, tuple(names))

    @classmethod
    def all_of(cls, *names: str) -> "AccessPolicy":
        return cls(PolicyMode.all, tuple(names))

    @classmethod
    def role(cls, name: str) -> "AccessPolicy":
        return cls(PolicyMode.role, (name,))


def _unauthorized(code: str, message: str) -> Result:
    return Return.err(Error(code, message, ErrorKind.unauthorized))


class AccessGate:
    """
    Per-request state machine:
    Unauthenticated -> TokenPresent -> TokenValid -> Authenticated
    [-> PermissionCheck].

    The user row is always re-read after the token verifies, so a
    deactivated account or changed role takes effect immediately.
    """

    def __init__(
        self,
        tokens: TokenService,
        uow_factory: UnitOfWorkFactory,
        resolver: PermissionResolver,
    ):
        self.tokens = tokens
        self.uow_factory = uow_factory
        self.resolver = resolver

    async def authenticate(self, token: Optional[str]) -> Result[AuthenticatedUser]:
        """
        Resolve the caller from a raw bearer token.

        Args:
            token: Access token with the scheme already stripped, or None
                when the request carried no bearer credentials

        Returns:
            Result with AuthenticatedUser, or an unauthorized Error
            (MISSING_TOKEN, TOKEN_EXPIRED, INVALID_TOKEN, USER_INACTIVE)
        """
        token = (token or "").strip()
        if not token:
            return _unauthorized(
                "MISSING_TOKEN", "Missing or invalid authorization header"
            )

        try:
            claims = self.tokens.verify(token, expected_type=ACCESS_TOKEN_TYPE)
        except TokenExpiredError as exc:
            return _unauthorized("TOKEN_EXPIRED", str(exc))
        except TokenError as exc:
            return _unauthorized("INVALID_TOKEN", str(exc))

        async with self.uow_factory() as uow:
            user = await uow.users.get_by_id(claims.user_id)
            if user is None or not user.is_active:
                logger.info("Rejected token for missing or inactive user %s", claims.user_id)
                return _unauthorized("USER_INACTIVE", "User not found or inactive")

            # Missing or inactive role leaves no role name to match
            role = await uow.roles.get_by_id(user.role_id)
            role_name = role.name if role is not None and role.is_active else None

            # Built before the unit of work ends; its rollback expires the rows
            authenticated = AuthenticatedUser(
                id=user.id, email=user.email, role=role_name, role_id=user.role_id
            )

        return Return.ok(authenticated)

    async def authenticate_optional(
        self, token: Optional[str]
    ) -> Optional[AuthenticatedUser]:
        """Same flow as authenticate, but any failure means anonymous"""
        result = await self.authenticate(token)
        if result.is_err():
            return None
        return result.value

    async def authorize(
        self, user: AuthenticatedUser, policy: AccessPolicy
    ) -> Result[None]:
        """
        Check an authenticated user against a route policy.

        Returns:
            Result with None if allowed, or a forbidden Error
        """
        names = list(policy.names)

        if policy.mode == PolicyMode.role:
            allowed = user.role is not None and user.role == names[0]
            message = f"Role required: {names[0]}"
        elif policy.mode == PolicyMode.permission:
            allowed = await self.resolver.user_has_permission(user.id, names[0])
            message = f"Permission required: {names[0]}"
        elif policy.mode == PolicyMode.any:
            allowed = await self.resolver.user_has_any_permission(user.id, names)
            message = f"One of these permissions required: {', '.join(names)}"
        else:
            allowed = await self.resolver.user_has_all_permissions(user.id, names)
            message = f"All of these permissions required: {', '.join(names)}"

        if not allowed:
            logger.warning("User %s denied: %s", user.id, message)
            return Return.err(Error("INSUFFICIENT_PERMISSION", message, ErrorKind.forbidden))

        return Return.ok(None)
