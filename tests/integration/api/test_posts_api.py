"""Integration tests for posts, feeds and cascading deletes."""

from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import CommentModel, LikeModel
from tests.conftest import Register

POSTS = "/api/v1/posts"


async def _post(client: AsyncClient, user: dict, content: str = "hello") -> dict:
    response = await client.post(POSTS, json={"content": content}, headers=user["headers"])
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreatePost:
    async def test_create_returns_card(self, client: AsyncClient, register: Register) -> None:
        alice = await register("alice")

        response = await client.post(
            POSTS,
            json={"content": "  hello world ", "attachments": ["https://cdn.example.com/a.png"]},
            headers=alice["headers"],
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["content"] == "hello world"
        assert data["attachments"] == ["https://cdn.example.com/a.png"]
        assert data["author"]["username"] == "alice"
        assert (data["like_count"], data["comment_count"], data["viewer_has_liked"]) == (
            0,
            0,
            False,
        )

    async def test_requires_auth(self, client: AsyncClient) -> None:
        response = await client.post(POSTS, json={"content": "hello"})

        assert response.status_code == 401

    async def test_blank_content_is_400(self, client: AsyncClient, register: Register) -> None:
        alice = await register("alice")

        response = await client.post(POSTS, json={"content": "   "}, headers=alice["headers"])

        assert response.status_code == 400
        assert response.json()["error_code"] == "EMPTY_CONTENT"

    async def test_too_long_content_is_400(self, client: AsyncClient, register: Register) -> None:
        alice = await register("alice")

        response = await client.post(
            POSTS, json={"content": "x" * 2001}, headers=alice["headers"]
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "CONTENT_TOO_LONG"

    async def test_unknown_field_is_422(self, client: AsyncClient, register: Register) -> None:
        alice = await register("alice")

        response = await client.post(
            POSTS, json={"content": "hi", "like_count": 99}, headers=alice["headers"]
        )

        assert response.status_code == 422


class TestOwnership:
    async def test_non_author_cannot_update(self, client: AsyncClient, register: Register) -> None:
        alice = await register("alice")
        bob = await register("bob")
        post = await _post(client, alice, "original")

        response = await client.patch(
            f"{POSTS}/{post['id']}", json={"content": "hijacked"}, headers=bob["headers"]
        )

        assert response.status_code == 403
        unchanged = await client.get(f"{POSTS}/{post['id']}")
        assert unchanged.json()["data"]["content"] == "original"

    async def test_non_author_cannot_delete(self, client: AsyncClient, register: Register) -> None:
        alice = await register("alice")
        bob = await register("bob")
        post = await _post(client, alice)

        response = await client.delete(f"{POSTS}/{post['id']}", headers=bob["headers"])

        assert response.status_code == 403
        assert (await client.get(f"{POSTS}/{post['id']}")).status_code == 200

    async def test_author_updates(self, client: AsyncClient, register: Register) -> None:
        alice = await register("alice")
        post = await _post(client, alice, "draft")

        response = await client.patch(
            f"{POSTS}/{post['id']}", json={"content": "final"}, headers=alice["headers"]
        )

        assert response.status_code == 200
        assert response.json()["data"]["content"] == "final"

    async def test_missing_post_is_404(self, client: AsyncClient) -> None:
        response = await client.get(f"{POSTS}/00000000-0000-4000-8000-000000000000")

        assert response.status_code == 404
        assert response.json()["error_code"] == "POST_NOT_FOUND"


class TestCascade:
    async def test_delete_removes_comments_and_likes(
        self, client: AsyncClient, register: Register, db_session: AsyncSession
    ) -> None:
        alice = await register("alice")
        bob = await register("bob")
        post = await _post(client, alice)
        post_url = f"{POSTS}/{post['id']}"
        await client.post(f"{post_url}/comments", json={"content": "hi"}, headers=bob["headers"])
        await client.post(f"{post_url}/like", headers=bob["headers"])

        response = await client.delete(post_url, headers=alice["headers"])

        assert response.status_code == 204
        assert (await client.get(post_url)).status_code == 404
        assert (await client.get(f"{post_url}/comments")).status_code == 404
        comments = await db_session.scalar(select(func.count()).select_from(CommentModel))
        likes = await db_session.scalar(select(func.count()).select_from(LikeModel))
        assert comments == 0
        assert likes == 0


class TestFeeds:
    async def test_pagination_page_two(self, client: AsyncClient, register: Register) -> None:
        alice = await register("alice")
        for i in range(15):
            await _post(client, alice, f"post {i}")

        response = await client.get(POSTS, params={"page": 2, "limit": 10})

        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 5
        assert body["meta"] == {"total": 15, "page": 2, "limit": 10, "total_pages": 2}

    async def test_global_feed_newest_first(self, client: AsyncClient, register: Register) -> None:
        alice = await register("alice")
        for content in ("first", "second", "third"):
            await _post(client, alice, content)

        response = await client.get(POSTS)

        assert [p["content"] for p in response.json()["data"]] == ["third", "second", "first"]

    async def test_limit_bounds(self, client: AsyncClient) -> None:
        assert (await client.get(POSTS, params={"limit": 51})).status_code == 422
        assert (await client.get(POSTS, params={"page": 0})).status_code == 422

    async def test_following_feed(self, client: AsyncClient, register: Register) -> None:
        alice = await register("alice")
        bob = await register("bob")
        carol = await register("carol")
        await _post(client, bob, "from bob")
        await _post(client, carol, "from carol")
        await _post(client, alice, "from alice")
        await client.post(f"/api/v1/users/{bob['id']}/follow", headers=alice["headers"])

        response = await client.get(f"{POSTS}/feed", headers=alice["headers"])

        assert response.status_code == 200
        assert [p["content"] for p in response.json()["data"]] == ["from bob"]

    async def test_following_feed_requires_auth(self, client: AsyncClient) -> None:
        assert (await client.get(f"{POSTS}/feed")).status_code == 401

    async def test_user_posts(self, client: AsyncClient, register: Register) -> None:
        alice = await register("alice")
        bob = await register("bob")
        await _post(client, alice, "mine")
        await _post(client, bob, "not mine")

        response = await client.get(f"/api/v1/users/{alice['id']}/posts")

        assert [p["content"] for p in response.json()["data"]] == ["mine"]
