"""Unit tests for CommentService."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    ContentTooLongError,
    EmptyContentError,
    PostNotFoundError,
    UserNotFoundError,
)
from domain.entities.comment import Comment
from domain.services.comment_service import CommentService
from tests.unit.conftest import FakeUnitOfWork, make_post


@pytest.fixture
def service(uow: FakeUnitOfWork) -> CommentService:
    return CommentService(lambda: uow, max_comment_length=10)


class TestCreateComment:
    async def test_create(self, service: CommentService, uow: FakeUnitOfWork, user_id: UUID):
        post = make_post(uuid4())
        uow.posts.get.return_value = post
        uow.comments.create.side_effect = lambda c: c

        comment = await service.create_comment(post.id, user_id, " nice ")

        assert comment.content == "nice"
        assert comment.post_id == post.id
        assert comment.author_id == user_id
        assert uow.committed

    async def test_missing_post(self, service: CommentService, uow: FakeUnitOfWork, user_id: UUID):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.create_comment(uuid4(), user_id, "hi")

    async def test_deleted_author(
        self, service: CommentService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.posts.get.return_value = make_post(uuid4())
        uow.users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.create_comment(uuid4(), user_id, "hi")

        uow.comments.create.assert_not_called()

    async def test_content_rules(
        self, service: CommentService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.posts.get.return_value = make_post(uuid4())

        with pytest.raises(EmptyContentError):
            await service.create_comment(uuid4(), user_id, "   ")
        with pytest.raises(ContentTooLongError):
            await service.create_comment(uuid4(), user_id, "x" * 11)


class TestUpdateComment:
    async def test_author_updates(
        self, service: CommentService, uow: FakeUnitOfWork, user_id: UUID
    ):
        comment = Comment(post_id=uuid4(), author_id=user_id, content="old")
        uow.comments.get.return_value = comment
        uow.comments.update.side_effect = lambda c: c

        updated = await service.update_comment(comment.id, user_id, "new")

        assert updated.content == "new"

    async def test_post_owner_cannot_edit(
        self, service: CommentService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        post = make_post(other_id)
        comment = Comment(post_id=post.id, author_id=user_id, content="mine")
        uow.comments.get.return_value = comment
        uow.posts.get.return_value = post

        with pytest.raises(AuthorizationError):
            await service.update_comment(comment.id, other_id, "theirs")

    async def test_missing_comment(self, service: CommentService, uow: FakeUnitOfWork):
        uow.comments.get.return_value = None

        with pytest.raises(CommentNotFoundError):
            await service.update_comment(uuid4(), uuid4(), "text")


class TestDeleteComment:
    async def test_author_deletes(
        self, service: CommentService, uow: FakeUnitOfWork, user_id: UUID
    ):
        comment = Comment(post_id=uuid4(), author_id=user_id, content="bye")
        uow.comments.get.return_value = comment

        await service.delete_comment(comment.id, user_id)

        uow.comments.delete.assert_awaited_once_with(comment.id)
        uow.posts.get.assert_not_called()

    async def test_post_owner_moderates(
        self, service: CommentService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        post = make_post(other_id)
        comment = Comment(post_id=post.id, author_id=user_id, content="spam")
        uow.comments.get.return_value = comment
        uow.posts.get.return_value = post

        await service.delete_comment(comment.id, other_id)

        uow.comments.delete.assert_awaited_once_with(comment.id)
        assert uow.committed

    async def test_stranger_forbidden(
        self, service: CommentService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        post = make_post(other_id)
        comment = Comment(post_id=post.id, author_id=user_id, content="hello")
        uow.comments.get.return_value = comment
        uow.posts.get.return_value = post

        with pytest.raises(AuthorizationError):
            await service.delete_comment(comment.id, uuid4())

        uow.comments.delete.assert_not_called()


class TestListing:
    async def test_list_by_post(self, service: CommentService, uow: FakeUnitOfWork):
        post = make_post(uuid4())
        uow.posts.get.return_value = post
        comments = [Comment(post_id=post.id, author_id=uuid4(), content=str(i)) for i in range(3)]
        uow.comments.list_by_post.return_value = (comments, 3)

        page = await service.list_by_post(post.id, page=1, limit=10)

        assert [c.content for c in page.items] == ["0", "1", "2"]
        assert page.total_pages == 1

    async def test_list_missing_post(self, service: CommentService, uow: FakeUnitOfWork):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.list_by_post(uuid4(), page=1, limit=10)

    async def test_count_by_post(self, service: CommentService, uow: FakeUnitOfWork):
        uow.comments.count_by_post.return_value = 0

        assert await service.count_by_post(uuid4()) == 0
