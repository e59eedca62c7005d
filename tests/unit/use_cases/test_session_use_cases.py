"""
Unit tests for LogoutUseCase and GetMeUseCase
"""
import pytest

from src.app.use_cases.auth import GetMeUseCase, LogoutUseCase
from src.domain.entities import Permission, Role, User


@pytest.mark.asyncio
async def test_logout_clears_refresh_token(mock_uow):
    use_case = LogoutUseCase(mock_uow)

    result = await use_case.execute(3)

    assert result.value.message == "Logged out successfully"
    mock_uow.users.update_refresh_token.assert_awaited_once_with(3, None)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_logout_twice_is_harmless(mock_uow):
    use_case = LogoutUseCase(mock_uow)

    await use_case.execute(3)
    result = await use_case.execute(3)

    assert result.is_ok()


@pytest.fixture
def me_user(mock_uow):
    user = User(id=3, email="a@x.com", password_hash="h", name="Alice", role_id=1)
    mock_uow.users.get_by_id.return_value = user
    mock_uow.roles.get_by_id.return_value = Role(id=1, name="admin", is_active=True)
    mock_uow.roles.get_permissions.return_value = [
        Permission(id=1, name="admin.access", is_active=True),
        Permission(id=2, name="users.manage", is_active=True),
        Permission(id=3, name="legacy.perm", is_active=False),
    ]
    return user


@pytest.mark.asyncio
async def test_get_me_lists_active_permissions(mock_uow, me_user):
    use_case = GetMeUseCase(mock_uow)

    result = await use_case.execute(3)

    me = result.value
    assert me.user.email == "a@x.com"
    assert me.user.role == "admin"
    assert me.is_active is True
    assert me.permissions == ["admin.access", "users.manage"]


@pytest.mark.asyncio
async def test_get_me_with_inactive_role_has_no_permissions(mock_uow, me_user):
    mock_uow.roles.get_by_id.return_value = Role(id=1, name="admin", is_active=False)
    use_case = GetMeUseCase(mock_uow)

    result = await use_case.execute(3)

    assert result.value.permissions == []


@pytest.mark.asyncio
async def test_get_me_unknown_user(mock_uow):
    mock_uow.users.get_by_id.return_value = None
    use_case = GetMeUseCase(mock_uow)

    result = await use_case.execute(3)

    assert result.error.code == "USER_NOT_FOUND"
