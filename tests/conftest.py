"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path
from typing import Any

# Test settings must be in place before anything reads core.config
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import settings
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.database.models import Base
from infrastructure.database.session import enable_sqlite_foreign_keys

Register = Callable[..., Awaitable[dict[str, Any]]]


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """A fresh in-memory database per test, with FK cascades enforced."""
    engine = create_async_engine(
        settings.test_database_url,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
) -> FastAPI:
    """
    Application wired to the test database.

    Every service factory is overridden so that services share a Unit of
    Work bound to the per-test in-memory engine.
    """
    from api.dependencies.auth import get_account_service, get_auth_provider
    from api.v1 import dependencies as deps
    from domain.services.auth_service import AuthService
    from domain.services.comment_service import CommentService
    from domain.services.feed_service import FeedService
    from domain.services.follow_service import FollowService
    from domain.services.like_service import LikeService
    from domain.services.post_service import PostService
    from domain.services.profile_service import ProfileService
    from infrastructure.database.session import get_async_session
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[deps.get_auth_service] = lambda: AuthService(test_uow_factory)
    app.dependency_overrides[get_account_service] = lambda: AuthService(test_uow_factory)
    app.dependency_overrides[deps.get_profile_service] = lambda: ProfileService(
        test_uow_factory
    )
    app.dependency_overrides[deps.get_follow_service] = lambda: FollowService(
        test_uow_factory
    )
    app.dependency_overrides[deps.get_post_service] = lambda: PostService(
        test_uow_factory,
        max_post_length=settings.max_post_length,
        max_attachments=settings.max_attachments,
    )
    app.dependency_overrides[deps.get_comment_service] = lambda: CommentService(
        test_uow_factory,
        max_comment_length=settings.max_comment_length,
    )
    app.dependency_overrides[deps.get_like_service] = lambda: LikeService(test_uow_factory)
    app.dependency_overrides[deps.get_feed_service] = lambda: FeedService(test_uow_factory)
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async test client without credentials."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def register(client: AsyncClient) -> Register:
    """
    Sign up a user through the API.

    Returns the user payload plus ``headers`` carrying its bearer token.
    The client's cookie jar is cleared so requests stay anonymous unless
    the headers are passed explicitly.
    """

    async def _register(
        username: str, email: str | None = None, password: str = "correct-horse"
    ) -> dict[str, Any]:
        response = await client.post(
            "/api/v1/auth/signup",
            json={
                "username": username,
                "email": email or f"{username.lower()}@example.com",
                "password": password,
            },
        )
        assert response.status_code == 201, response.text
        body = response.json()
        client.cookies.clear()
        return {
            **body["user"],
            "token": body["access_token"],
            "headers": {"Authorization": f"Bearer {body['access_token']}"},
        }

    return _register
