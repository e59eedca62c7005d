import logging

from src.app.services.password_service import PasswordService
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, ErrorKind, Result, Return
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Use case for an authenticated user changing their own password.

    Business Rules:
    - New password is validated before anything is read or written
    - Current password must verify against the stored hash
    - Any pending reset token and the stored refresh token are cleared
    """

    def __init__(self, uow: UnitOfWork, passwords: PasswordService):
        self.uow = uow
        self.passwords = passwords

    async def execute(
        self, user_id: int, current_password: str, new_password: str
    ) -> Result[MessageResponse]:
        if not current_password or not new_password:
            return Return.err(
                Error(
                    "PASSWORD_FIELDS_REQUIRED",
                    "Current password and new password are required",
                    ErrorKind.bad_request,
                )
            )

        strength = self.passwords.validate_strength(new_password)
        if not strength.valid:
            return Return.err(Error("WEAK_PASSWORD", strength.reason, ErrorKind.bad_request))

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found", ErrorKind.not_found))

            if not await self.passwords.averify(current_password, user.password_hash):
                return Return.err(
                    Error(
                        "INVALID_CURRENT_PASSWORD",
                        "Current password is incorrect",
                        ErrorKind.unauthorized,
                    )
                )

            await self.uow.users.update_password(user.id, await self.passwords.ahash(new_password))
            await self.uow.users.update_refresh_token(user.id, None)

            await self.uow.commit()

            logger.info("Password changed for user %s", user.id)

            return Return.ok(MessageResponse(message="Password has been changed successfully"))
