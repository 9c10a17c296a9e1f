"""
API Tests for the user directory, health and fallback error handling
"""
import pytest
from httpx import AsyncClient


class TestUserDirectory:

    @pytest.mark.asyncio
    async def test_get_user_is_public(self, client: AsyncClient, test_user):
        response = await client.get(f"/api/users/{test_user.user_id}")

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["email"] == test_user.email
        assert "hashed_password" not in user

    @pytest.mark.asyncio
    async def test_unknown_user(self, client: AsyncClient):
        response = await client.get("/api/users/nobody")

        assert response.status_code == 404
        assert response.json()["error_code"] == "USER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_list_requires_admin(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/users", headers=auth_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_lists_and_filters_by_role(self, client: AsyncClient, test_user, admin_user,
                                                   admin_auth_headers):
        everyone = await client.get("/api/users", headers=admin_auth_headers)
        admins = await client.get("/api/users", headers=admin_auth_headers, params={"role": "admin"})

        assert everyone.json()["pagination"]["total"] == 2
        assert [u["user_id"] for u in admins.json()["users"]] == [admin_user.user_id]

    @pytest.mark.asyncio
    async def test_admin_role_change_applies(self, client: AsyncClient, admin_auth_headers):
        response = await client.put("/api/auth/profile", headers=admin_auth_headers, json={"role": "user"})

        assert response.status_code == 200
        assert response.json()["user"]["role"] == "user"


class TestServiceEndpoints:

    @pytest.mark.asyncio
    async def test_liveness(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_readiness_checks_database(self, client: AsyncClient):
        response = await client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_root(self, client: AsyncClient):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"

    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_envelope(self, client: AsyncClient):
        response = await client.get("/api/nothing-here")

        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["error_code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_security_headers(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.headers["x-content-type-options"] == "nosniff"

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, client: AsyncClient):
        response = await client.get("/api/skills", headers={"X-Request-ID": "abc123"})

        assert response.headers["x-request-id"] == "abc123"
        assert response.headers["x-response-time"].endswith("ms")
