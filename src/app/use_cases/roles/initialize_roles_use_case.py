"""
Initialize Roles Use Case

Seeds the permission catalogue and the two system roles. Safe to run
repeatedly: existing permissions and roles are left untouched.
"""

import logging

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    DEFAULT_ROLE_DESCRIPTIONS,
    DEFAULT_ROLE_PERMISSIONS,
    Permission,
    PermissionName,
    Role,
)
from src.libs.result import Result, Return
from .dtos import InitializeRolesResponse

logger = logging.getLogger(__name__)


class InitializeRolesUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[InitializeRolesResponse]:
        async with self.uow:
            permissions_created = await self.uow.permissions.create_many(
                [
                    Permission(name=name.value, description=f"Permission: {name.value}")
                    for name in PermissionName
                ]
            )

            all_permissions = await self.uow.permissions.get_all()
            permission_ids = {p.name: p.id for p in all_permissions}

            roles_created = []
            for role_name, granted in DEFAULT_ROLE_PERMISSIONS.items():
                if await self.uow.roles.get_by_name(role_name) is not None:
                    continue

                await self.uow.roles.create(
                    Role(name=role_name, description=DEFAULT_ROLE_DESCRIPTIONS[role_name]),
                    [permission_ids[name] for name in granted if name in permission_ids],
                )
                roles_created.append(role_name)

            await self.uow.commit()

        logger.info(
            "Seeded %d permissions and roles %s", permissions_created, roles_created
        )
        return Return.ok(
            InitializeRolesResponse(
                permissions_created=permissions_created, roles_created=roles_created
            )
        )
