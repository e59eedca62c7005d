"""
Token Service

Issues and verifies HMAC-signed JWT access and refresh tokens.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import uuid4

from jose import ExpiredSignatureError, JWTError, jwt

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenError(Exception):
    """Base class for token verification failures"""


class TokenExpiredError(TokenError):
    def __init__(self, message: str = "Token expired"):
        super().__init__(message)


class InvalidTokenError(TokenError):
    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


@dataclass(frozen=True)
class TokenClaims:
    """Identity payload carried by a token"""

    user_id: int
    email: str
    role: str


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenService:
    """
    Stateless signed tokens.

    Business Rules:
    - Access tokens live 15 minutes by default and are never stored
    - Refresh tokens live 7 days by default; the current one is mirrored
      on the user row so it can be revoked
    - Every token carries a unique jti, so two tokens issued in the same
      second for the same claims still differ
    - Expiry and tampering are reported as distinct errors
    """

    def __init__(
        self,
        secret: str,
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
        algorithm: str = "HS256",
    ):
        self.secret = secret
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.algorithm = algorithm

    def issue_access_token(self, claims: TokenClaims) -> str:
        return self._issue(claims, ACCESS_TOKEN_TYPE, self.access_ttl)

    def issue_refresh_token(self, claims: TokenClaims) -> str:
        return self._issue(claims, REFRESH_TOKEN_TYPE, self.refresh_ttl)

    def issue_pair(self, claims: TokenClaims) -> TokenPair:
        return TokenPair(
            access_token=self.issue_access_token(claims),
            refresh_token=self.issue_refresh_token(claims),
        )

    def verify(self, token: str, expected_type: Optional[str] = None) -> TokenClaims:
        """
        Verify signature and expiry and return the identity claims.

        Args:
            token: Encoded JWT
            expected_type: "access" or "refresh"; a token of another type is invalid

        Raises:
            TokenExpiredError: token is past its expiry
            InvalidTokenError: bad signature, malformed token or wrong type
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError:
            raise InvalidTokenError()

        if expected_type is not None and payload.get("type") != expected_type:
            raise InvalidTokenError()

        try:
            return TokenClaims(
                user_id=int(payload["user_id"]),
                email=payload["email"],
                role=payload["role"],
            )
        except (KeyError, TypeError, ValueError):
            raise InvalidTokenError()

    def decode_unsafe(self, token: str) -> Optional[dict]:
        """
        Decode claims WITHOUT verifying the signature.

        Diagnostics only; never base an authorization decision on this.
        """
        try:
            return jwt.get_unverified_claims(token)
        except JWTError:
            logger.debug("Could not decode token for diagnostics")
            return None

    def _issue(self, claims: TokenClaims, token_type: str, ttl: timedelta) -> str:
        now = datetime.now(UTC)
        payload = {
            "user_id": claims.user_id,
            "email": claims.email,
            "role": claims.role,
            "type": token_type,
            "jti": uuid4().hex,
            "iat": now,
            "exp": now + ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)
