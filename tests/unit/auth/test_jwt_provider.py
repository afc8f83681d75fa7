"""Unit tests for JWTAuthProvider."""

from uuid import uuid4

import pytest
from jose import jwt as jose_jwt

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser


def _make_hs256_token(payload: dict, secret: str = "test-secret") -> str:
    """Create an HS256-signed JWT with a given payload."""
    return jose_jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def provider() -> JWTAuthProvider:
    return JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)


class TestRoundTrip:
    async def test_created_token_validates(self, provider: JWTAuthProvider):
        user = TokenUser(id=uuid4(), username="alice", email="alice@example.com")

        result = await provider.validate_token(provider.create_token(user))

        assert result == user

    def test_payload_carries_expiry(self, provider: JWTAuthProvider):
        user = TokenUser(id=uuid4(), username="alice")

        claims = jose_jwt.get_unverified_claims(provider.create_token(user))

        assert claims["sub"] == str(user.id)
        assert claims["exp"] - claims["iat"] == 30 * 60

    def test_expire_seconds(self, provider: JWTAuthProvider):
        assert provider.expire_seconds == 1800


class TestRejectedTokens:
    async def test_wrong_secret(self, provider: JWTAuthProvider):
        token = _make_hs256_token(
            {"sub": str(uuid4()), "username": "alice", "exp": 9999999999}, secret="other"
        )

        assert await provider.validate_token(token) is None

    async def test_missing_sub(self, provider: JWTAuthProvider):
        token = _make_hs256_token({"username": "alice", "exp": 9999999999})

        assert await provider.validate_token(token) is None

    async def test_missing_username(self, provider: JWTAuthProvider):
        token = _make_hs256_token({"sub": str(uuid4()), "exp": 9999999999})

        assert await provider.validate_token(token) is None

    async def test_malformed_subject(self, provider: JWTAuthProvider):
        token = _make_hs256_token({"sub": "not-a-uuid", "username": "alice", "exp": 9999999999})

        assert await provider.validate_token(token) is None

    async def test_garbage(self, provider: JWTAuthProvider):
        assert await provider.validate_token("not.a.jwt") is None
