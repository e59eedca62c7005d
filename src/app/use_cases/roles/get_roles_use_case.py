from typing import List

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, ErrorKind, Result, Return
from .dtos import RoleResponse


class ListRolesUseCase:
    """Lists active roles with their permission names"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[List[RoleResponse]]:
        async with self.uow:
            roles = await self.uow.roles.get_all()
            response = []
            for role in roles:
                permissions = await self.uow.roles.get_permissions(role.id)
                response.append(RoleResponse.from_entity(role, permissions))
            return Return.ok(response)


class GetRoleUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, role_id: int) -> Result[RoleResponse]:
        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found", ErrorKind.not_found))

            permissions = await self.uow.roles.get_permissions(role.id)
            return Return.ok(RoleResponse.from_entity(role, permissions))
