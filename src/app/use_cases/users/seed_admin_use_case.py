"""
Seed Admin Use Case

Bootstraps the first administrator. Registration always assigns the
"user" role and only admins may assign roles, so without this step no
admin can exist.
"""

import logging
from typing import Optional

from src.app.services.password_service import PasswordService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import RoleName, User
from src.libs.result import Error, ErrorKind, Result, Return
from .dtos import SeedAdminResponse

logger = logging.getLogger(__name__)


class SeedAdminUseCase:
    """
    Business Rules:
    - Idempotent: an existing account with the email is never recreated
      and its password is left alone
    - An existing account without the admin role is promoted
    - The "admin" role must already be seeded (InitializeRolesUseCase)
    - A new admin password must pass the strength policy
    """

    def __init__(self, uow: UnitOfWork, passwords: PasswordService):
        self.uow = uow
        self.passwords = passwords

    async def execute(
        self, email: str, password: str, name: Optional[str] = None
    ) -> Result[SeedAdminResponse]:
        if not email or not password:
            return Return.err(
                Error(
                    "CREDENTIALS_REQUIRED",
                    "Admin email and password are required",
                    ErrorKind.bad_request,
                )
            )

        async with self.uow:
            admin_role = await self.uow.roles.get_by_name(RoleName.admin.value)
            if admin_role is None:
                logger.error("Role '%s' is not seeded", RoleName.admin.value)
                return Return.err(Error("ADMIN_ROLE_MISSING", "Admin role is not configured"))

            existing = await self.uow.users.get_by_email(email)
            if existing is not None:
                promoted = existing.role_id != admin_role.id
                if promoted:
                    await self.uow.users.update_role(existing.id, admin_role.id)
                    await self.uow.commit()
                    logger.info("Promoted existing user %s to admin", existing.id)
                else:
                    logger.info("Admin user %s already exists", existing.id)
                return Return.ok(
                    SeedAdminResponse(user_id=existing.id, created=False, promoted=promoted)
                )

            strength = self.passwords.validate_strength(password)
            if not strength.valid:
                return Return.err(Error("WEAK_PASSWORD", strength.reason, ErrorKind.bad_request))

            user = await self.uow.users.create(
                User(
                    email=email,
                    password_hash=await self.passwords.ahash(password),
                    name=name,
                    role_id=admin_role.id,
                )
            )
            await self.uow.commit()

            logger.info("Created admin user %s", user.id)
            return Return.ok(SeedAdminResponse(user_id=user.id, created=True, promoted=False))
