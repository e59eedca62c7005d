import logging

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SYSTEM_ROLES
from src.libs.result import Error, ErrorKind, Result, Return

logger = logging.getLogger(__name__)


class DeleteRoleUseCase:
    """
    Soft-deletes a role.

    Business Rules:
    - Role must exist
    - "admin" and "user" can never be deleted, whoever asks
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, role_id: int) -> Result[None]:
        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found", ErrorKind.not_found))

            if role.name in SYSTEM_ROLES:
                logger.warning("Attempt to delete system role '%s'", role.name)
                return Return.err(
                    Error(
                        "SYSTEM_ROLE_PROTECTED",
                        "Cannot delete system roles",
                        ErrorKind.forbidden,
                    )
                )

            await self.uow.roles.delete(role.id)
            await self.uow.commit()

            logger.info("Role '%s' deleted", role.name)
            return Return.ok(None)
