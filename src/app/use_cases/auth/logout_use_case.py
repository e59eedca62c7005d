from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import MessageResponse


class LogoutUseCase:
    """Clears the stored refresh token. Calling it twice is harmless."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: int) -> Result[MessageResponse]:
        async with self.uow:
            await self.uow.users.update_refresh_token(user_id, None)
            await self.uow.commit()

        return Return.ok(MessageResponse(message="Logged out successfully"))
