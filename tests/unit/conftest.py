import pytest
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

from src.app.services.password_service import PasswordService
from src.app.services.token_service import TokenService

TEST_SECRET = "unit-test-secret-key-with-at-least-32-bytes"


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    for name in (
        "get_by_email",
        "get_by_id",
        "get_page",
        "count",
        "create",
        "update",
        "delete",
        "email_exists",
        "get_by_reset_token",
        "update_password",
        "update_refresh_token",
        "update_password_reset_token",
        "update_role",
    ):
        setattr(uow.users, name, AsyncMock())

    uow.roles = MagicMock()
    for name in (
        "get_all",
        "get_by_id",
        "get_by_name",
        "create",
        "update",
        "replace_permissions",
        "get_permissions",
        "has_permission",
        "delete",
    ):
        setattr(uow.roles, name, AsyncMock())

    uow.permissions = MagicMock()
    for name in (
        "get_all",
        "get_by_id",
        "get_by_ids",
        "get_by_name",
        "create",
        "create_many",
        "update",
        "delete",
        "unlink_from_roles",
    ):
        setattr(uow.permissions, name, AsyncMock())

    return uow


@pytest.fixture
def uow_factory(mock_uow):
    """Factory handing out the same mocked unit of work on every call"""
    return MagicMock(return_value=mock_uow)


@pytest.fixture
def passwords():
    # Low cost parameters keep the suite fast; the algorithm is unchanged
    return PasswordService(time_cost=1, memory_cost=8192, parallelism=1)


@pytest.fixture
def tokens():
    return TokenService(
        secret=TEST_SECRET,
        access_ttl=timedelta(minutes=15),
        refresh_ttl=timedelta(days=7),
    )
