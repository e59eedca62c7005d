import logging

from src.app.repositories.errors import DuplicateEntryError
from src.app.services.password_service import PasswordService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import RoleName, User
from src.libs.result import Error, ErrorKind, Result, Return
from .dtos import CreateUserCommand, UserResponse

logger = logging.getLogger(__name__)


def email_taken() -> Error:
    return Error(
        "EMAIL_ALREADY_EXISTS", "A user with this email already exists", ErrorKind.conflict
    )


class CreateUserUseCase:
    """
    Creates an account on behalf of an administrator.

    Business Rules:
    - Same email and password rules as self-registration
    - role_id, when given, must name an active role; otherwise "user"
    - No tokens are issued; the new user logs in normally
    """

    def __init__(self, uow: UnitOfWork, passwords: PasswordService):
        self.uow = uow
        self.passwords = passwords

    async def execute(self, command: CreateUserCommand) -> Result[UserResponse]:
        if not command.email or not command.email.strip():
            return Return.err(Error("EMAIL_REQUIRED", "Email is required", ErrorKind.bad_request))

        strength = self.passwords.validate_strength(command.password or "")
        if not strength.valid:
            return Return.err(Error("WEAK_PASSWORD", strength.reason, ErrorKind.bad_request))

        async with self.uow:
            if await self.uow.users.email_exists(command.email):
                return Return.err(email_taken())

            if command.role_id is not None:
                role = await self.uow.roles.get_by_id(command.role_id)
                if role is None:
                    return Return.err(
                        Error("ROLE_NOT_FOUND", "Role not found", ErrorKind.not_found)
                    )
                if not role.is_active:
                    return Return.err(
                        Error(
                            "ROLE_INACTIVE",
                            "Cannot assign an inactive role",
                            ErrorKind.bad_request,
                        )
                    )
            else:
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
                return Return.err(email_taken())

            await self.uow.commit()

            logger.info("User %s created with role '%s'", user.id, role.name)
            return Return.ok(UserResponse.from_entity(user, role.name))
