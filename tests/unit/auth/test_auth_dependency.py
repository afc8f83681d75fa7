"""Unit tests for authentication dependencies."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from api.dependencies.auth import get_current_user, get_optional_user
from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser


@pytest.fixture
def provider() -> JWTAuthProvider:
    return JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)


@pytest.fixture
def token_user() -> TokenUser:
    return TokenUser(id=uuid4(), username="alice", email="alice@example.com")


@pytest.fixture
def accounts() -> AsyncMock:
    """Auth service stand-in where every account still exists."""
    service = AsyncMock()
    service.account_exists.return_value = True
    return service


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


# --- get_current_user ---


class TestGetCurrentUser:
    async def test_returns_user_with_bearer_token(
        self, provider: JWTAuthProvider, token_user: TokenUser, accounts: AsyncMock
    ):
        token = provider.create_token(token_user)

        result = await get_current_user(_bearer(token), None, provider, accounts)

        assert result.id == token_user.id
        assert result.username == "alice"

    async def test_falls_back_to_session_cookie(
        self, provider: JWTAuthProvider, token_user: TokenUser, accounts: AsyncMock
    ):
        token = provider.create_token(token_user)

        result = await get_current_user(None, token, provider, accounts)

        assert result.id == token_user.id

    async def test_bearer_wins_over_cookie(
        self, provider: JWTAuthProvider, token_user: TokenUser, accounts: AsyncMock
    ):
        other = TokenUser(id=uuid4(), username="bob")
        bearer = provider.create_token(token_user)
        cookie = provider.create_token(other)

        result = await get_current_user(_bearer(bearer), cookie, provider, accounts)

        assert result.id == token_user.id

    async def test_raises_when_no_credentials(self, provider: JWTAuthProvider, accounts: AsyncMock):
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(None, None, provider, accounts)

        assert exc_info.value.error_code == ErrorCode.UNAUTHORIZED
        assert exc_info.value.status_code == 401

    async def test_raises_when_invalid_token(self, provider: JWTAuthProvider, accounts: AsyncMock):
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(_bearer("invalid.jwt.token"), None, provider, accounts)

        assert exc_info.value.error_code == ErrorCode.INVALID_TOKEN

    async def test_raises_when_expired_token(self, token_user: TokenUser, accounts: AsyncMock):
        expired = JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=-1)
        token = expired.create_token(token_user)
        provider = JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(_bearer(token), None, provider, accounts)

        assert exc_info.value.error_code == ErrorCode.INVALID_TOKEN

    async def test_raises_when_account_deleted(
        self, provider: JWTAuthProvider, token_user: TokenUser, accounts: AsyncMock
    ):
        accounts.account_exists.return_value = False
        token = provider.create_token(token_user)

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(_bearer(token), None, provider, accounts)

        assert exc_info.value.error_code == ErrorCode.INVALID_TOKEN
        accounts.account_exists.assert_awaited_once_with(token_user.id)


# --- get_optional_user ---


class TestGetOptionalUser:
    async def test_returns_user_with_valid_token(
        self, provider: JWTAuthProvider, token_user: TokenUser
    ):
        token = provider.create_token(token_user)

        result = await get_optional_user(_bearer(token), None, provider)

        assert result is not None
        assert result.id == token_user.id

    async def test_returns_none_when_no_credentials(self, provider: JWTAuthProvider):
        assert await get_optional_user(None, None, provider) is None

    async def test_invalid_token_treated_as_anonymous(self, provider: JWTAuthProvider):
        assert await get_optional_user(_bearer("invalid.jwt.token"), None, provider) is None
