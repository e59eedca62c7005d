"""
Permission Use Cases

List, create, update and soft-delete permissions.
"""

import logging
import re
from typing import List

from src.app.repositories.errors import DuplicateEntryError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Permission
from src.libs.result import Error, ErrorKind, Result, Return
from .dtos import CreatePermissionCommand, PermissionResponse, UpdatePermissionCommand

logger = logging.getLogger(__name__)

PERMISSION_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_-]*\.[a-z][a-z0-9_-]*$")


def _invalid_name(name: str) -> Error:
    return Error(
        "INVALID_PERMISSION_NAME",
        f"Permission name must look like 'resource.action': {name}",
        ErrorKind.bad_request,
    )


def _already_exists() -> Error:
    return Error(
        "PERMISSION_ALREADY_EXISTS",
        "Permission with this name already exists",
        ErrorKind.conflict,
    )


def _not_found() -> Error:
    return Error("PERMISSION_NOT_FOUND", "Permission not found", ErrorKind.not_found)


class ListPermissionsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[List[PermissionResponse]]:
        async with self.uow:
            permissions = await self.uow.permissions.get_all()
            return Return.ok([PermissionResponse.from_entity(p) for p in permissions])


class CreatePermissionUseCase:
    """
    A name held by a deleted permission revives that row. The revived
    permission starts with no role links, like a brand new one.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: CreatePermissionCommand) -> Result[PermissionResponse]:
        if not PERMISSION_NAME_PATTERN.match(command.name or ""):
            return Return.err(_invalid_name(command.name))

        async with self.uow:
            existing = await self.uow.permissions.get_by_name(command.name)
            if existing is not None and existing.is_active:
                return Return.err(_already_exists())

            try:
                if existing is not None:
                    logger.info("Reactivating deleted permission '%s'", existing.name)
                    await self.uow.permissions.unlink_from_roles(existing.id)
                    existing.is_active = True
                    existing.description = command.description
                    permission = await self.uow.permissions.update(existing)
                else:
                    permission = await self.uow.permissions.create(
                        Permission(name=command.name, description=command.description)
                    )
            except DuplicateEntryError:
                return Return.err(_already_exists())

            await self.uow.commit()

            logger.info("Permission '%s' created", permission.name)
            return Return.ok(PermissionResponse.from_entity(permission))


class UpdatePermissionUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, permission_id: int, command: UpdatePermissionCommand
    ) -> Result[PermissionResponse]:
        async with self.uow:
            permission = await self.uow.permissions.get_by_id(permission_id)
            if permission is None:
                return Return.err(_not_found())

            if command.name is not None and command.name != permission.name:
                if not PERMISSION_NAME_PATTERN.match(command.name):
                    return Return.err(_invalid_name(command.name))
                existing = await self.uow.permissions.get_by_name(command.name)
                if existing is not None and existing.id != permission.id:
                    return Return.err(_already_exists())
                permission.name = command.name

            if command.description is not None:
                permission.description = command.description
            if command.is_active is not None:
                permission.is_active = command.is_active

            try:
                permission = await self.uow.permissions.update(permission)
            except DuplicateEntryError:
                return Return.err(_already_exists())
            await self.uow.commit()

            return Return.ok(PermissionResponse.from_entity(permission))


class DeletePermissionUseCase:
    """Soft delete: the permission stays linked but stops matching checks"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, permission_id: int) -> Result[None]:
        async with self.uow:
            permission = await self.uow.permissions.get_by_id(permission_id)
            if permission is None:
                return Return.err(_not_found())

            await self.uow.permissions.delete(permission.id)
            await self.uow.commit()

            logger.info("Permission '%s' deleted", permission.name)
            return Return.ok(None)
