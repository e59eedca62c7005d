"""
Permission Resolver

Answers "may this user do X?" against the current role/permission tables.
Nothing is cached: every call reads fresh data.
"""

import asyncio
import logging
from typing import Sequence

from src.app.services.unit_of_work import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class PermissionResolver:
    """
    Resolves effective permissions through the user's role.

    Business Rules:
    - Fail-closed: unknown user, missing or inactive role, missing or
      inactive permission all resolve to False
    - Flat namespace: "users.manage" never implies "users.create"
    - ANY/ALL run each check concurrently, each on its own unit of work
    """

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self.uow_factory = uow_factory

    async def role_has_permission(self, role_id: int, permission_name: str) -> bool:
        async with self.uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if role is None or not role.is_active:
                return False
            return await uow.roles.has_permission(role.id, permission_name)

    async def user_has_permission(self, user_id: int, permission_name: str) -> bool:
        async with self.uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if user is None or user.role_id is None:
                return False

            role = await uow.roles.get_by_id(user.role_id)
            if role is None or not role.is_active:
                return False

            return await uow.roles.has_permission(role.id, permission_name)

    async def user_has_any_permission(
        self, user_id: int, permission_names: Sequence[str]
    ) -> bool:
        results = await self._check_each(user_id, permission_names)
        return any(results)

    async def user_has_all_permissions(
        self, user_id: int, permission_names: Sequence[str]
    ) -> bool:
        results = await self._check_each(user_id, permission_names)
        return all(results)

    async def _check_each(self, user_id: int, permission_names: Sequence[str]) -> list:
        checks = [self.user_has_permission(user_id, name) for name in permission_names]
        results = await asyncio.gather(*checks)
        logger.debug(
            "Permission checks for user %s: %s",
            user_id,
            dict(zip(permission_names, results)),
        )
        return list(results)
