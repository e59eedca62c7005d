"""
Password Service

Argon2id hashing, strength policy and reset-token generation.
"""

import re
import secrets
from dataclasses import dataclass
from typing import Optional

import anyio.to_thread
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

SPECIAL_CHARACTERS = r"""[!@#$%^&*(),.?":{}|<>]"""


@dataclass(frozen=True)
class PasswordStrength:
    valid: bool
    reason: Optional[str] = None


class PasswordService:
    """
    One-way password hashing with argon2id.

    Business Rules:
    - Salt and cost parameters are embedded in the hash string
    - Hashing the same password twice yields different hashes
    - Verification never raises on a malformed hash; it reports no match
    - Strength policy is ordered and reports only the first failed rule
    - The a-prefixed variants run argon2 in a worker thread so request
      handlers do not block the event loop
    """

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
        min_length: int = 8,
    ):
        self.hasher = PasswordHasher(
            time_cost=time_cost, memory_cost=memory_cost, parallelism=parallelism
        )
        self.min_length = min_length
        self._dummy_hash: Optional[str] = None

    def hash(self, password: str) -> str:
        return self.hasher.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return self.hasher.verify(password_hash, password)
        except (VerificationError, InvalidHashError):
            return False

    def dummy_verify(self, password: str) -> None:
        """Spend the cost of a verification when there is no hash to check"""
        if self._dummy_hash is None:
            self._dummy_hash = self.hash(secrets.token_hex(16))
        self.verify(password, self._dummy_hash)

    async def ahash(self, password: str) -> str:
        return await anyio.to_thread.run_sync(self.hash, password)

    async def averify(self, password: str, password_hash: str) -> bool:
        return await anyio.to_thread.run_sync(self.verify, password, password_hash)

    async def adummy_verify(self, password: str) -> None:
        await anyio.to_thread.run_sync(self.dummy_verify, password)

    def validate_strength(self, password: str) -> PasswordStrength:
        rules = [
            (
                lambda p: len(p) >= self.min_length,
                f"Password must be at least {self.min_length} characters long",
            ),
            (
                lambda p: re.search(r"[A-Z]", p) is not None,
                "Password must contain at least one uppercase letter",
            ),
            (
                lambda p: re.search(r"[a-z]", p) is not None,
                "Password must contain at least one lowercase letter",
            ),
            (
                lambda p: re.search(r"[0-9]", p) is not None,
                "Password must contain at least one number",
            ),
            (
                lambda p: re.search(SPECIAL_CHARACTERS, p) is not None,
                "Password must contain at least one special character",
            ),
        ]
        for check, message in rules:
            if not check(password):
                return PasswordStrength(valid=False, reason=message)
        return PasswordStrength(valid=True)

    @staticmethod
    def generate_reset_token(length: int = 32) -> str:
        """Hex-encoded random token, 2 * length characters"""
        return secrets.token_hex(length)
