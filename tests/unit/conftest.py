"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.post import Post
from domain.entities.user import User


class FakeUnitOfWork:
    """Fake Unit of Work with one AsyncMock per repository."""

    def __init__(self) -> None:
        self.users = AsyncMock()
        self.profiles = AsyncMock()
        self.posts = AsyncMock()
        self.comments = AsyncMock()
        self.likes = AsyncMock()
        self.follows = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def other_id() -> UUID:
    """A random user ID distinct from user_id."""
    return uuid4()


def make_user(username: str = "alice", user_id: UUID | None = None) -> User:
    user = User(
        username=username,
        email=f"{username}@example.com",
        password_hash="hashed",
    )
    if user_id is not None:
        user.id = user_id
    return user


def make_post(author_id: UUID, content: str = "hello") -> Post:
    return Post(author_id=author_id, content=content)
