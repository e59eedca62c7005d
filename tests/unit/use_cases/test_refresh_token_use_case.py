"""
Unit tests for RefreshTokenUseCase

Tests rotation and replay detection of the single stored refresh token.
"""
from datetime import timedelta

import pytest

from src.app.services.token_service import TokenClaims, TokenService
from src.app.use_cases.auth import RefreshTokenUseCase
from src.domain.entities import Role, User
from src.libs.result import ErrorKind

CLAIMS = TokenClaims(user_id=3, email="a@x.com", role="user")


@pytest.fixture
def current_token(tokens):
    return tokens.issue_refresh_token(CLAIMS)


@pytest.fixture
def stored_user(mock_uow, current_token):
    user = User(
        id=3,
        email="a@x.com",
        password_hash="h",
        role_id=2,
        is_active=True,
        refresh_token=current_token,
    )
    mock_uow.users.get_by_id.return_value = user
    mock_uow.roles.get_by_id.return_value = Role(id=2, name="user", is_active=True)
    return user


@pytest.mark.asyncio
async def test_refresh_rotates_tokens(mock_uow, tokens, stored_user, current_token):
    use_case = RefreshTokenUseCase(mock_uow, tokens)

    result = await use_case.execute(current_token)

    assert result.is_ok()
    new_refresh = result.value.refresh_token
    assert new_refresh != current_token
    assert tokens.verify(result.value.access_token, "access") == CLAIMS
    mock_uow.users.update_refresh_token.assert_awaited_once_with(3, new_refresh)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_refresh_with_rotated_token_is_revoked(mock_uow, tokens, stored_user, current_token):
    """Test replaying a token after rotation is rejected"""
    stored_user.refresh_token = tokens.issue_refresh_token(CLAIMS)
    use_case = RefreshTokenUseCase(mock_uow, tokens)

    result = await use_case.execute(current_token)

    assert result.error.code == "REFRESH_TOKEN_REVOKED"
    assert result.error.kind == ErrorKind.unauthorized
    mock_uow.users.update_refresh_token.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_after_logout_is_revoked(mock_uow, tokens, stored_user, current_token):
    stored_user.refresh_token = None
    use_case = RefreshTokenUseCase(mock_uow, tokens)

    result = await use_case.execute(current_token)

    assert result.error.code == "REFRESH_TOKEN_REVOKED"


@pytest.mark.asyncio
async def test_refresh_with_access_token_is_invalid(mock_uow, tokens, stored_user):
    use_case = RefreshTokenUseCase(mock_uow, tokens)

    result = await use_case.execute(tokens.issue_access_token(CLAIMS))

    assert result.error.code == "INVALID_REFRESH_TOKEN"
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_expired_token(mock_uow, tokens, stored_user):
    expired = TokenService(secret=tokens.secret, refresh_ttl=timedelta(seconds=-5))
    use_case = RefreshTokenUseCase(mock_uow, tokens)

    result = await use_case.execute(expired.issue_refresh_token(CLAIMS))

    assert result.error.code == "REFRESH_TOKEN_EXPIRED"


@pytest.mark.asyncio
async def test_refresh_garbage_token(mock_uow, tokens):
    use_case = RefreshTokenUseCase(mock_uow, tokens)

    result = await use_case.execute("garbage")

    assert result.error.code == "INVALID_REFRESH_TOKEN"


@pytest.mark.asyncio
async def test_refresh_missing_token(mock_uow, tokens):
    use_case = RefreshTokenUseCase(mock_uow, tokens)

    result = await use_case.execute("")

    assert result.error.code == "REFRESH_TOKEN_REQUIRED"
    assert result.error.kind == ErrorKind.bad_request


@pytest.mark.asyncio
async def test_refresh_deleted_user(mock_uow, tokens, current_token):
    mock_uow.users.get_by_id.return_value = None
    use_case = RefreshTokenUseCase(mock_uow, tokens)

    result = await use_case.execute(current_token)

    assert result.error.code == "USER_NOT_FOUND"
    assert result.error.kind == ErrorKind.not_found


@pytest.mark.asyncio
async def test_refresh_inactive_user(mock_uow, tokens, stored_user, current_token):
    stored_user.is_active = False
    use_case = RefreshTokenUseCase(mock_uow, tokens)

    result = await use_case.execute(current_token)

    assert result.error.code == "USER_INACTIVE"
    assert result.error.kind == ErrorKind.forbidden
