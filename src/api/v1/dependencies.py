"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.auth_service import AuthService
from domain.services.comment_service import CommentService
from domain.services.feed_service import FeedService
from domain.services.follow_service import FollowService
from domain.services.like_service import LikeService
from domain.services.post_service import PostService
from domain.services.profile_service import ProfileService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_auth_service() -> AuthService:
    return AuthService(get_uow_factory())


@lru_cache
def get_profile_service() -> ProfileService:
    return ProfileService(get_uow_factory())


@lru_cache
def get_follow_service() -> FollowService:
    return FollowService(get_uow_factory())


@lru_cache
def get_post_service() -> PostService:
    """Get Post service instance, bounded by the configured limits."""
    return PostService(
        get_uow_factory(),
        max_post_length=settings.max_post_length,
        max_attachments=settings.max_attachments,
    )


@lru_cache
def get_comment_service() -> CommentService:
    return CommentService(
        get_uow_factory(),
        max_comment_length=settings.max_comment_length,
    )


@lru_cache
def get_like_service() -> LikeService:
    return LikeService(get_uow_factory())


@lru_cache
def get_feed_service() -> FeedService:
    """Get the read-side aggregator for feeds, profiles and search."""
    return FeedService(get_uow_factory())
