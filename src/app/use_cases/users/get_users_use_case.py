import math
from typing import Dict, Iterable, Optional

from src.app.repositories.user_repository import UserFilters
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from src.libs.result import Error, ErrorKind, Result, Return
from .dtos import Pagination, UserPage, UserResponse

MAX_PAGE_SIZE = 100


async def role_names(uow: UnitOfWork, users: Iterable[User]) -> Dict[int, Optional[str]]:
    """Role name per role id referenced by the users"""
    names = {}
    for role_id in {u.role_id for u in users}:
        role = await uow.roles.get_by_id(role_id)
        names[role_id] = role.name if role is not None else None
    return names


def user_not_found() -> Error:
    return Error("USER_NOT_FOUND", "User not found", ErrorKind.not_found)


class ListUsersUseCase:
    """
    Paginated user listing.

    Business Rules:
    - page is at least 1; limit is clamped to 1..100
    - email and name filter by substring
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, page: int = 1, limit: int = 10, filters: Optional[UserFilters] = None
    ) -> Result[UserPage]:
        page = max(1, page)
        limit = min(max(1, limit), MAX_PAGE_SIZE)

        async with self.uow:
            total = await self.uow.users.count(filters)
            users = await self.uow.users.get_page(filters, offset=(page - 1) * limit, limit=limit)
            names = await role_names(self.uow, users)

            return Return.ok(
                UserPage(
                    data=[UserResponse.from_entity(u, names[u.role_id]) for u in users],
                    pagination=Pagination(
                        page=page,
                        limit=limit,
                        total=total,
                        total_pages=math.ceil(total / limit),
                    ),
                )
            )


class GetUserUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: int) -> Result[UserResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(user_not_found())

            names = await role_names(self.uow, [user])
            return Return.ok(UserResponse.from_entity(user, names[user.role_id]))
