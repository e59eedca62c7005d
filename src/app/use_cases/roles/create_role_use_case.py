import logging

from src.app.repositories.errors import DuplicateEntryError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Role
from src.libs.result import Error, ErrorKind, Result, Return
from .dtos import CreateRoleCommand, RoleResponse
from .permission_ids import find_unknown_permission_ids

logger = logging.getLogger(__name__)


def role_name_taken() -> Error:
    return Error(
        "ROLE_ALREADY_EXISTS",
        "Role with this name already exists",
        ErrorKind.conflict,
    )


class CreateRoleUseCase:
    """
    Creates a role, optionally with an initial permission set.

    Business Rules:
    - Role name must be non-empty and unique among active roles
    - Every permission id must exist
    - A name held by a deleted (inactive) role revives that row: it is
      reactivated with the new description and permission set, so users
      still pointing at it get the new grants
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: CreateRoleCommand) -> Result[RoleResponse]:
        name = (command.name or "").strip()
        if not name:
            return Return.err(
                Error("ROLE_NAME_REQUIRED", "Role name is required", ErrorKind.bad_request)
            )

        async with self.uow:
            existing = await self.uow.roles.get_by_name(name)
            if existing is not None and existing.is_active:
                return Return.err(role_name_taken())

            permission_ids = command.permission_ids or []
            error = await find_unknown_permission_ids(self.uow, permission_ids)
            if error is not None:
                return Return.err(error)

            try:
                if existing is not None:
                    role = await self._revive(existing, command, permission_ids)
                else:
                    role = await self.uow.roles.create(
                        Role(name=name, description=command.description), permission_ids
                    )
            except DuplicateEntryError:
                return Return.err(role_name_taken())

            permissions = await self.uow.roles.get_permissions(role.id)

            await self.uow.commit()

            logger.info("Role '%s' created", role.name)
            return Return.ok(RoleResponse.from_entity(role, permissions))

    async def _revive(self, role: Role, command: CreateRoleCommand, permission_ids) -> Role:
        logger.info("Reactivating deleted role '%s'", role.name)
        role.is_active = True
        role.description = command.description
        await self.uow.roles.replace_permissions(role.id, permission_ids)
        return await self.uow.roles.update(role)
