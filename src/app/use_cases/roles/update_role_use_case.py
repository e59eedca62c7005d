import logging

from src.app.repositories.errors import DuplicateEntryError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SYSTEM_ROLES
from src.libs.result import Error, ErrorKind, Result, Return
from .create_role_use_case import role_name_taken
from .dtos import RoleResponse, UpdateRoleCommand
from .permission_ids import find_unknown_permission_ids

logger = logging.getLogger(__name__)


class UpdateRoleUseCase:
    """
    Updates role attributes and optionally replaces its permission set.

    Business Rules:
    - Role must exist
    - A new name is stripped, must not be blank and must not belong
      to another role, deleted ones included
    - System roles keep their name and cannot be deactivated
    - permission_ids replaces every link (delete-then-recreate)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, role_id: int, command: UpdateRoleCommand) -> Result[RoleResponse]:
        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found", ErrorKind.not_found))

            is_system = role.name in SYSTEM_ROLES

            name = command.name.strip() if command.name is not None else None
            if name is not None and not name:
                return Return.err(
                    Error("ROLE_NAME_REQUIRED", "Role name is required", ErrorKind.bad_request)
                )

            if name is not None and name != role.name:
                if is_system:
                    return Return.err(
                        Error(
                            "SYSTEM_ROLE_PROTECTED",
                            "System roles cannot be renamed",
                            ErrorKind.forbidden,
                        )
                    )
                existing = await self.uow.roles.get_by_name(name)
                if existing is not None and existing.id != role.id:
                    return Return.err(role_name_taken())
                role.name = name

            if command.is_active is False and is_system:
                return Return.err(
                    Error(
                        "SYSTEM_ROLE_PROTECTED",
                        "System roles cannot be deactivated",
                        ErrorKind.forbidden,
                    )
                )

            if command.permission_ids is not None:
                error = await find_unknown_permission_ids(self.uow, command.permission_ids)
                if error is not None:
                    return Return.err(error)
                await self.uow.roles.replace_permissions(role.id, command.permission_ids)

            if command.description is not None:
                role.description = command.description
            if command.is_active is not None:
                role.is_active = command.is_active

            try:
                role = await self.uow.roles.update(role)
            except DuplicateEntryError:
                return Return.err(role_name_taken())
            permissions = await self.uow.roles.get_permissions(role.id)

            await self.uow.commit()

            logger.info("Role %s updated", role.id)
            return Return.ok(RoleResponse.from_entity(role, permissions))
