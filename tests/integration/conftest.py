from contextlib import asynccontextmanager

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.password_service import PasswordService
from src.app.use_cases.roles import InitializeRolesUseCase
from src.app.use_cases.users import SeedAdminUseCase
from src.depends import (
    get_email_sender,
    get_password_service,
    get_unit_of_work,
    get_uow_factory,
)
from tests.fixtures.json_loader import TestDataLoader
from tests.utils.auth_helpers import DEFAULT_PASSWORD, RecordingEmailSender, login


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(db_session):
    """Permission catalogue plus the admin and user system roles"""
    async with SqlAlchemyUnitOfWork(db_session) as uow:
        result = await InitializeRolesUseCase(uow).execute()
    return result.value


@pytest_asyncio.fixture
def email_sender():
    return RecordingEmailSender()


@pytest_asyncio.fixture
def passwords():
    # Low cost parameters keep the suite fast; the algorithm is unchanged
    return PasswordService(time_cost=1, memory_cost=8192, parallelism=1)


@pytest_asyncio.fixture
async def app(db_session, session_factory, email_sender, passwords, seeded):
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    @asynccontextmanager
    async def test_unit_of_work_scope():
        async with session_factory() as session:
            async with SqlAlchemyUnitOfWork(session) as uow:
                yield uow

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_uow_factory] = lambda: test_unit_of_work_scope
    app.dependency_overrides[get_password_service] = lambda: passwords
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def admin(client, db_session, passwords):
    """Administrator bootstrapped the way the init script does it, logged in"""
    async with SqlAlchemyUnitOfWork(db_session) as uow:
        result = await SeedAdminUseCase(uow, passwords).execute(
            "admin@example.com", DEFAULT_PASSWORD, "Admin"
        )
    assert result.value.created

    return await login(client, "admin@example.com")
