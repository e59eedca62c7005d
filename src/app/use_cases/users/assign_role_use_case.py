"""
Assign Role Use Case

Moves a user to a different role. The change applies to the next request
because the access gate re-reads the user on every call.
"""

import logging

from pydantic import BaseModel

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, ErrorKind, Result, Return

logger = logging.getLogger(__name__)


class AssignRoleResponse(BaseModel):
    user_id: int
    role_id: int
    role: str


class AssignRoleUseCase:
    """
    Business Rules:
    - Target user must exist
    - Role must exist and be active
    - Existing tokens keep their old role claim until they expire, but
      authorization always uses the stored role
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: int, role_id: int) -> Result[AssignRoleResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found", ErrorKind.not_found))

            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found", ErrorKind.not_found))

            if not role.is_active:
                return Return.err(
                    Error("ROLE_INACTIVE", "Cannot assign an inactive role", ErrorKind.bad_request)
                )

            old_role_id = user.role_id
            await self.uow.users.update_role(user.id, role.id)
            await self.uow.commit()

            logger.info(
                "User %s moved from role %s to role %s", user_id, old_role_id, role.id
            )
            return Return.ok(AssignRoleResponse(user_id=user_id, role_id=role.id, role=role.name))
