import logging
from typing import Optional

from src.app.repositories.errors import DuplicateEntryError
from src.app.services.email_sender import IEmailSender
from src.app.services.password_service import PasswordService
from src.app.services.token_service import TokenClaims, TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import RoleName, User
from src.libs.result import Error, ErrorKind, Result, Return
from .dtos import AuthResponse, RegisterCommand, UserInfo

logger = logging.getLogger(__name__)


def _email_taken() -> Error:
    return Error(
        "EMAIL_ALREADY_EXISTS", "A user with this email already exists", ErrorKind.conflict
    )


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[AuthResponse] (user view + token pair)

    Business Logic:
    1. Email must be non-empty
    2. Password must pass the strength policy
    3. Email must not be registered yet
    4. Hash password with argon2id
    5. Create User with the "user" role, looked up by name
    6. Issue token pair and store the refresh token on the user
    7. Commit, then send the welcome email (failure does not undo the commit)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        passwords: PasswordService,
        tokens: TokenService,
        email_sender: Optional[IEmailSender] = None,
    ):
        self.uow = uow
        self.passwords = passwords
        self.tokens = tokens
        self.email_sender = email_sender

    async def execute(self, command: RegisterCommand) -> Result[AuthResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with email, password and optional name

        Returns:
            Result[AuthResponse], or Error(EMAIL_REQUIRED | WEAK_PASSWORD |
            EMAIL_ALREADY_EXISTS | DEFAULT_ROLE_MISSING)
        """
        async with self.uow:
            if not command.email or not command.email.strip():
                return Return.err(
                    Error("EMAIL_REQUIRED", "Email is required", ErrorKind.bad_request)
                )

            strength = self.passwords.validate_strength(command.password or "")
            if not strength.valid:
                return Return.err(
                    Error("WEAK_PASSWORD", strength.reason, ErrorKind.bad_request)
                )

            if await self.uow.users.email_exists(command.email):
                return Return.err(_email_taken())

            role = await self.uow.roles.get_by_name(RoleName.user.value)
            if role is None:
                logger.error("Default role '%s' is not seeded", RoleName.user.value)
                return Return.err(
                    Error("DEFAULT_ROLE_MISSING", "Default role is not configured")
                )

            user = User(
                email=command.email,
                password_hash=await self.passwords.ahash(command.password),
                name=command.name,
                role_id=role.id,
            )
            try:
                user = await self.uow.users.create(user)
            except DuplicateEntryError:
                # Lost the race with a concurrent registration
                return Return.err(_email_taken())

            pair = self.tokens.issue_pair(
                TokenClaims(user_id=user.id, email=user.email, role=role.name)
            )
            await self.uow.users.update_refresh_token(user.id, pair.refresh_token)

            await self.uow.commit()

        logger.info("User %s registered", user.id)

        if self.email_sender is not None:
            try:
                await self.email_sender.send_welcome(user.email, user.name)
            except Exception:
                logger.exception("Failed to send welcome email to user %s", user.id)

        return Return.ok(
            AuthResponse(
                user=UserInfo(id=user.id, email=user.email, name=user.name, role=role.name),
                access_token=pair.access_token,
                refresh_token=pair.refresh_token,
            )
        )
