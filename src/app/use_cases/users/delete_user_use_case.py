import logging

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .get_users_use_case import user_not_found

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """Removes the account. Unlike roles and permissions, users are hard-deleted."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: int) -> Result[None]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(user_not_found())

            await self.uow.users.delete(user.id)
            await self.uow.commit()

            logger.info("User %s deleted", user_id)
            return Return.ok(None)
