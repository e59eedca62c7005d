"""
Initialize roles, permissions and the first administrator.

Creates the tables if needed, seeds the permission catalogue and the
"admin" / "user" system roles, then creates (or promotes) the admin
account from ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_NAME when a password
is configured. Safe to run repeatedly:

    python -m src.scripts.init_roles
"""

import asyncio
import logging

from sqlmodel import SQLModel

from config import ApplicationConfig
from src.app.use_cases.roles import InitializeRolesUseCase, ListPermissionsUseCase, ListRolesUseCase
from src.app.use_cases.users import SeedAdminUseCase
from src.depends import engine, password_service, unit_of_work_scope

logger = logging.getLogger(__name__)


async def seed_admin() -> bool:
    if not ApplicationConfig.ADMIN_PASSWORD:
        logger.warning("ADMIN_PASSWORD is not set, skipping the admin user")
        return True

    async with unit_of_work_scope() as uow:
        result = await SeedAdminUseCase(uow, password_service).execute(
            ApplicationConfig.ADMIN_EMAIL,
            ApplicationConfig.ADMIN_PASSWORD,
            ApplicationConfig.ADMIN_NAME,
        )

    if result.is_err():
        logger.error("Admin user not seeded: %s", result.error.message)
        return False

    seeded = result.value
    if seeded.created:
        logger.info(
            "Admin user %s created; change its password after first login",
            ApplicationConfig.ADMIN_EMAIL,
        )
    elif seeded.promoted:
        logger.info("Existing user %s promoted to admin", ApplicationConfig.ADMIN_EMAIL)
    else:
        logger.info("Admin user %s already exists", ApplicationConfig.ADMIN_EMAIL)
    return True


async def main() -> int:
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    try:
        async with unit_of_work_scope() as uow:
            seeded = await InitializeRolesUseCase(uow).execute()
        async with unit_of_work_scope() as uow:
            roles = await ListRolesUseCase(uow).execute()
        async with unit_of_work_scope() as uow:
            permissions = await ListPermissionsUseCase(uow).execute()
        admin_ok = await seed_admin()
    finally:
        await engine.dispose()

    logger.info(
        "Created %d permissions, roles created: %s",
        seeded.value.permissions_created,
        seeded.value.roles_created or "none",
    )
    for role in roles.value:
        logger.info("Role %s: %d permissions", role.name, len(role.permissions))
    logger.info("Available permissions: %s", ", ".join(p.name for p in permissions.value))
    return 0 if admin_ok else 1


if __name__ == "__main__":
    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    raise SystemExit(asyncio.run(main()))
