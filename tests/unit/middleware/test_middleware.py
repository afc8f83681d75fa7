"""Unit tests for middleware."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware


def _create_app_with_middleware() -> FastAPI:
    """Create a minimal FastAPI app with security and request ID middleware."""
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/test")
    async def _():
        return {"ok": True}

    return app


@pytest.fixture
async def client():
    transport = ASGITransport(app=_create_app_with_middleware())
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class TestSecurityHeadersMiddleware:
    @pytest.mark.parametrize(
        ("header", "value"),
        [
            ("x-content-type-options", "nosniff"),
            ("x-frame-options", "DENY"),
            ("referrer-policy", "strict-origin-when-cross-origin"),
        ],
    )
    async def test_adds_header(self, client: AsyncClient, header: str, value: str):
        response = await client.get("/test")

        assert response.headers[header] == value

    async def test_no_hsts_outside_production(self, client: AsyncClient):
        response = await client.get("/test")

        assert "strict-transport-security" not in response.headers


class TestRequestIDMiddleware:
    async def test_generates_request_id_when_not_provided(self, client: AsyncClient):
        response = await client.get("/test")

        assert len(response.headers["x-request-id"]) == 36

    async def test_propagates_existing_request_id(self, client: AsyncClient):
        response = await client.get("/test", headers={"X-Request-ID": "custom-req-123"})

        assert response.headers["x-request-id"] == "custom-req-123"

    @pytest.mark.parametrize("bad_id", ["has spaces", "x" * 129, "semi;colon"])
    async def test_replaces_malformed_request_id(self, client: AsyncClient, bad_id: str):
        response = await client.get("/test", headers={"X-Request-ID": bad_id})

        assert response.headers["x-request-id"] != bad_id
        assert len(response.headers["x-request-id"]) == 36

    async def test_generated_ids_differ(self, client: AsyncClient):
        r1 = await client.get("/test")
        r2 = await client.get("/test")

        assert r1.headers["x-request-id"] != r2.headers["x-request-id"]
