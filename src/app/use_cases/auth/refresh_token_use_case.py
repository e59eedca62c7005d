"""
Refresh Token Use Case

Exchanges a refresh token for a new token pair (rotation).
"""

import logging
import secrets

from src.app.services.token_service import (
    REFRESH_TOKEN_TYPE,
    TokenClaims,
    TokenError,
    TokenExpiredError,
    TokenService,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import RoleName
from src.libs.result import Error, ErrorKind, Result, Return
from .dtos import RefreshTokenResponse

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refreshing JWT access tokens.

    Business Rules:
    - Refresh token must verify (signature, expiry, type)
    - User must exist and be active
    - Presented token must equal the single token stored on the user;
      a mismatch means it was rotated away or revoked (replay)
    - Rotation: a new pair is issued and the stored token is overwritten
    - Concurrent refreshes race; the last writer wins
    """

    def __init__(self, uow: UnitOfWork, tokens: TokenService):
        self.uow = uow
        self.tokens = tokens

    async def execute(self, refresh_token: str) -> Result[RefreshTokenResponse]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token to verify and rotate

        Returns:
            Result with RefreshTokenResponse containing new tokens, or Error
        """
        if not refresh_token:
            return Return.err(
                Error("REFRESH_TOKEN_REQUIRED", "Refresh token is required", ErrorKind.bad_request)
            )

        try:
            claims = self.tokens.verify(refresh_token, expected_type=REFRESH_TOKEN_TYPE)
        except TokenExpiredError:
            return Return.err(
                Error("REFRESH_TOKEN_EXPIRED", "Refresh token expired", ErrorKind.unauthorized)
            )
        except TokenError:
            return Return.err(
                Error("INVALID_REFRESH_TOKEN", "Invalid refresh token", ErrorKind.unauthorized)
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(claims.user_id)

            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found", ErrorKind.not_found))

            if not user.is_active:
                return Return.err(
                    Error("USER_INACTIVE", "Account is deactivated", ErrorKind.forbidden)
                )

            stored = user.refresh_token
            if stored is None or not secrets.compare_digest(stored, refresh_token):
                logger.warning("Refresh token reuse or revoked token for user %s", user.id)
                return Return.err(
                    Error(
                        "REFRESH_TOKEN_REVOKED",
                        "Refresh token has been revoked",
                        ErrorKind.unauthorized,
                    )
                )

            role = await self.uow.roles.get_by_id(user.role_id)
            role_name = role.name if role is not None else RoleName.user.value

            pair = self.tokens.issue_pair(
                TokenClaims(user_id=user.id, email=user.email, role=role_name)
            )
            await self.uow.users.update_refresh_token(user.id, pair.refresh_token)

            await self.uow.commit()

            return Return.ok(
                RefreshTokenResponse(
                    access_token=pair.access_token,
                    refresh_token=pair.refresh_token,
                )
            )
