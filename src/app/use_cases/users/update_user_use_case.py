import logging

from src.app.repositories.errors import DuplicateEntryError
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .create_user_use_case import email_taken
from .dtos import UpdateUserCommand, UserResponse
from .get_users_use_case import role_names, user_not_found

logger = logging.getLogger(__name__)


class UpdateUserUseCase:
    """
    Updates profile fields and the active flag.

    Business Rules:
    - User must exist
    - A new email must not belong to another user
    - Deactivating clears the stored refresh token; the access gate
      already rejects inactive users on their next request
    - Roles change through AssignRoleUseCase, passwords through the
      password flows
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: int, command: UpdateUserCommand) -> Result[UserResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(user_not_found())

            if command.email is not None and command.email != user.email:
                if await self.uow.users.email_exists(command.email):
                    return Return.err(email_taken())
                user.email = command.email

            if command.name is not None:
                user.name = command.name

            if command.is_active is not None:
                user.is_active = command.is_active
                if not command.is_active:
                    user.refresh_token = None

            try:
                user = await self.uow.users.update(user)
            except DuplicateEntryError:
                return Return.err(email_taken())

            names = await role_names(self.uow, [user])
            await self.uow.commit()

            logger.info("User %s updated", user.id)
            return Return.ok(UserResponse.from_entity(user, names[user.role_id]))
