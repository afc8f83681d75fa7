"""Integration tests for profiles, search, the follow graph and account deletion."""

from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import FollowModel, PostModel
from tests.conftest import Register

USERS = "/api/v1/users"


def _follow_url(user: dict) -> str:
    return f"{USERS}/{user['id']}/follow"


class TestFollows:
    async def test_mutual_follow(self, client: AsyncClient, register: Register) -> None:
        a = await register("user_a")
        b = await register("user_b")

        assert (await client.post(_follow_url(b), headers=a["headers"])).status_code == 201
        assert (await client.post(_follow_url(a), headers=b["headers"])).status_code == 201

        a_sees_b = (await client.get(f"{USERS}/user_b", headers=a["headers"])).json()["data"]
        b_sees_a = (await client.get(f"{USERS}/user_a", headers=b["headers"])).json()["data"]
        assert a_sees_b["is_following"] is True
        assert b_sees_a["is_following"] is True
        for profile in (a_sees_b, b_sees_a):
            assert profile["follower_count"] == 1
            assert profile["following_count"] == 1

    async def test_self_follow_is_400(
        self, client: AsyncClient, register: Register, db_session: AsyncSession
    ) -> None:
        alice = await register("alice")

        response = await client.post(_follow_url(alice), headers=alice["headers"])

        assert response.status_code == 400
        assert response.json()["error_code"] == "SELF_FOLLOW"
        assert await db_session.scalar(select(func.count()).select_from(FollowModel)) == 0

    async def test_follow_twice_then_unfollow(
        self, client: AsyncClient, register: Register
    ) -> None:
        alice = await register("alice")
        bob = await register("bob")

        await client.post(_follow_url(bob), headers=alice["headers"])
        again = await client.post(_follow_url(bob), headers=alice["headers"])
        assert again.status_code == 409
        assert again.json()["error_code"] == "ALREADY_FOLLOWING"
        profile = (await client.get(f"{USERS}/bob")).json()["data"]
        assert profile["follower_count"] == 1

        assert (await client.delete(_follow_url(bob), headers=alice["headers"])).status_code == 204
        profile = (await client.get(f"{USERS}/bob")).json()["data"]
        assert profile["follower_count"] == 0

        not_following = await client.delete(_follow_url(bob), headers=alice["headers"])
        assert not_following.status_code == 404
        assert not_following.json()["error_code"] == "NOT_FOLLOWING"

    async def test_follow_unknown_user(self, client: AsyncClient, register: Register) -> None:
        alice = await register("alice")

        response = await client.post(
            f"{USERS}/00000000-0000-4000-8000-000000000000/follow", headers=alice["headers"]
        )

        assert response.status_code == 404

    async def test_follower_and_following_lists(
        self, client: AsyncClient, register: Register
    ) -> None:
        alice = await register("alice")
        bob = await register("bob")
        carol = await register("carol")
        await client.post(_follow_url(alice), headers=bob["headers"])
        await client.post(_follow_url(alice), headers=carol["headers"])

        followers = (await client.get(f"{USERS}/{alice['id']}/followers")).json()
        following = (await client.get(f"{USERS}/{bob['id']}/following")).json()

        assert [u["username"] for u in followers["data"]] == ["carol", "bob"]
        assert followers["meta"]["total"] == 2
        assert [u["username"] for u in following["data"]] == ["alice"]


class TestProfiles:
    async def test_update_me_and_view_profile(
        self, client: AsyncClient, register: Register
    ) -> None:
        alice = await register("alice")

        response = await client.patch(
            f"{USERS}/me",
            json={"display_name": "Alice L.", "bio": "Counting engines"},
            headers=alice["headers"],
        )
        assert response.status_code == 200
        assert response.json()["data"]["display_name"] == "Alice L."

        partial = await client.patch(
            f"{USERS}/me", json={"bio": "Poetical science"}, headers=alice["headers"]
        )
        me = partial.json()["data"]
        assert me["display_name"] == "Alice L."
        assert me["bio"] == "Poetical science"

        public = (await client.get(f"{USERS}/alice")).json()["data"]
        assert public["display_name"] == "Alice L."
        assert public["is_following"] is None
        assert "email" not in public

    async def test_bio_too_long_is_400(self, client: AsyncClient, register: Register) -> None:
        alice = await register("alice")

        response = await client.patch(
            f"{USERS}/me", json={"bio": "x" * 501}, headers=alice["headers"]
        )

        assert response.status_code == 400

    async def test_unknown_profile_field_is_422(
        self, client: AsyncClient, register: Register
    ) -> None:
        alice = await register("alice")

        response = await client.patch(
            f"{USERS}/me", json={"username": "mallory"}, headers=alice["headers"]
        )

        assert response.status_code == 422

    async def test_unknown_username_is_404(self, client: AsyncClient) -> None:
        response = await client.get(f"{USERS}/nobody_here")

        assert response.status_code == 404
        assert response.json()["error_code"] == "USER_NOT_FOUND"


class TestSearch:
    async def test_username_then_display_name(
        self, client: AsyncClient, register: Register
    ) -> None:
        await register("annabel")
        bob = await register("bob")
        await register("carol")
        await client.patch(
            f"{USERS}/me", json={"display_name": "Bob Annandale"}, headers=bob["headers"]
        )

        response = await client.get(f"{USERS}/search", params={"q": "ANN"})

        body = response.json()
        assert [u["username"] for u in body["data"]] == ["annabel", "bob"]
        assert body["data"][1]["display_name"] == "Bob Annandale"
        assert body["meta"]["total"] == 2

    async def test_blank_query_is_400(self, client: AsyncClient) -> None:
        response = await client.get(f"{USERS}/search", params={"q": "  "})

        assert response.status_code == 400


class TestDeleteAccount:
    async def test_delete_cascades(
        self, client: AsyncClient, register: Register, db_session: AsyncSession
    ) -> None:
        alice = await register("alice")
        bob = await register("bob")
        await client.post("/api/v1/posts", json={"content": "bye"}, headers=alice["headers"])
        await client.post(_follow_url(bob), headers=alice["headers"])

        response = await client.delete(f"{USERS}/me", headers=alice["headers"])

        assert response.status_code == 204
        assert (await client.get(f"{USERS}/alice")).status_code == 404
        assert await db_session.scalar(select(func.count()).select_from(PostModel)) == 0
        assert await db_session.scalar(select(func.count()).select_from(FollowModel)) == 0
        bob_profile = (await client.get(f"{USERS}/bob")).json()["data"]
        assert bob_profile["follower_count"] == 0

    async def test_token_of_deleted_account_is_rejected(
        self, client: AsyncClient, register: Register, db_session: AsyncSession
    ) -> None:
        alice = await register("alice")
        bob = await register("bob")
        post = await client.post("/api/v1/posts", json={"content": "hi"}, headers=bob["headers"])
        post_id = post.json()["data"]["id"]
        await client.delete(f"{USERS}/me", headers=alice["headers"])

        responses = [
            await client.post("/api/v1/posts", json={"content": "ghost"}, headers=alice["headers"]),
            await client.post(f"/api/v1/posts/{post_id}/like", headers=alice["headers"]),
            await client.post(
                f"/api/v1/posts/{post_id}/comments",
                json={"content": "boo"},
                headers=alice["headers"],
            ),
            await client.get(f"{USERS}/me", headers=alice["headers"]),
        ]

        for response in responses:
            assert response.status_code == 401
            assert response.json()["error_code"] == "INVALID_TOKEN"
        assert await db_session.scalar(select(func.count()).select_from(PostModel)) == 1
