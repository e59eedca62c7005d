from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import RoleName
from src.libs.result import Error, ErrorKind, Result, Return
from .dtos import MeResponse, UserInfo


class GetMeUseCase:
    """
    Loads the authenticated user's profile and effective permissions.

    Permissions are listed only while the role is active; inactive
    permissions are left out.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: int) -> Result[MeResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found", ErrorKind.not_found))

            role = await self.uow.roles.get_by_id(user.role_id)
            permissions = []
            if role is not None and role.is_active:
                permissions = [
                    p.name for p in await self.uow.roles.get_permissions(role.id) if p.is_active
                ]

            return Return.ok(
                MeResponse(
                    user=UserInfo(
                        id=user.id,
                        email=user.email,
                        name=user.name,
                        role=role.name if role is not None else RoleName.user.value,
                    ),
                    is_active=user.is_active,
                    permissions=permissions,
                )
            )
