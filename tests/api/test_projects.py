"""
API Tests for /projects
Tests for: listing with filters and paging, ownership of mutations, slug uniqueness
"""
import pytest
from httpx import AsyncClient

from tests.conftest import auth_headers_for, project_payload


async def create_project(client: AsyncClient, headers: dict, **overrides) -> dict:
    response = await client.post("/api/projects", headers=headers, json=project_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()["project"]


class TestCreateProject:

    @pytest.mark.asyncio
    async def test_create(self, client: AsyncClient, test_user, auth_headers):
        response = await client.post("/api/projects", headers=auth_headers, json=project_payload())

        assert response.status_code == 201
        project = response.json()["project"]
        assert project["user_id"] == test_user.user_id
        assert project["author_name"] == test_user.full_name
        assert project["technologies"] == ["React", "Node.js", "PostgreSQL"]

    @pytest.mark.asyncio
    async def test_owner_comes_from_token(self, client: AsyncClient, test_user, other_user, auth_headers):
        response = await client.post(
            "/api/projects", headers=auth_headers, json=project_payload(user_id=other_user.user_id)
        )

        assert response.status_code == 201
        assert response.json()["project"]["user_id"] == test_user.user_id

    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient):
        response = await client.post("/api/projects", json=project_payload())

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_duplicate_slug(self, client: AsyncClient, auth_headers, other_auth_headers):
        await create_project(client, auth_headers)

        response = await client.post("/api/projects", headers=other_auth_headers, json=project_payload())

        assert response.status_code == 400
        assert response.json()["error_code"] == "SLUG_EXISTS"

    @pytest.mark.asyncio
    async def test_short_content(self, client: AsyncClient, auth_headers):
        response = await client.post("/api/projects", headers=auth_headers, json=project_payload(content="short"))

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "content"


class TestGetProject:

    @pytest.mark.asyncio
    async def test_get_with_gallery(self, client: AsyncClient, auth_headers):
        project = await create_project(client, auth_headers)
        await client.post(
            f"/api/projects/{project['project_id']}/gallery",
            headers=auth_headers,
            json={"image_url": "https://picsum.photos/seed/a/800/600", "caption": "Home"},
        )

        response = await client.get(f"/api/projects/{project['project_id']}")

        assert response.status_code == 200
        detail = response.json()["project"]
        assert detail["slug"] == "ecommerce-platform"
        assert [img["caption"] for img in detail["gallery_images"]] == ["Home"]

    @pytest.mark.asyncio
    async def test_get_missing(self, client: AsyncClient):
        response = await client.get("/api/projects/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error_code"] == "PROJECT_NOT_FOUND"


class TestListProjects:

    @pytest.mark.asyncio
    async def test_filter_and_paginate(self, client: AsyncClient, test_user, other_user):
        headers_a = auth_headers_for(test_user)
        headers_b = auth_headers_for(other_user)
        for i in range(25):
            await create_project(client, headers_a, slug=f"a-project-{i}")
        for i in range(5):
            await create_project(client, headers_b, slug=f"b-project-{i}")

        response = await client.get("/api/projects", params={"user_id": test_user.user_id, "page": 1, "limit": 10})

        assert response.status_code == 200
        data = response.json()
        assert len(data["projects"]) == 10
        assert data["pagination"] == {"page": 1, "limit": 10, "total": 25, "totalPages": 3}
        assert {p["user_id"] for p in data["projects"]} == {test_user.user_id}

    @pytest.mark.asyncio
    async def test_category_filter_pages_cover_total(self, client: AsyncClient, auth_headers):
        for i in range(25):
            await create_project(client, auth_headers, slug=f"web-{i}")
        for i in range(5):
            await create_project(client, auth_headers, slug=f"mobile-{i}", category="Mobile Apps")

        first = await client.get(
            "/api/projects", params={"category": "Web Development", "page": 1, "limit": 10}
        )
        assert first.json()["pagination"] == {"page": 1, "limit": 10, "total": 25, "totalPages": 3}

        seen = []
        for page in range(1, 4):
            response = await client.get(
                "/api/projects", params={"category": "Web Development", "page": page, "limit": 10}
            )
            seen.extend(p["slug"] for p in response.json()["projects"])

        assert len(seen) == 25
        assert set(seen) == {f"web-{i}" for i in range(25)}

    @pytest.mark.asyncio
    async def test_page_beyond_offset_range_is_rejected(self, client: AsyncClient):
        response = await client.get("/api/projects", params={"page": 10 ** 17, "limit": 100})

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["details"][0]["field"] == "page"

    @pytest.mark.asyncio
    async def test_empty_list(self, client: AsyncClient):
        response = await client.get("/api/projects")

        assert response.status_code == 200
        assert response.json() == {
            "projects": [],
            "pagination": {"page": 1, "limit": 10, "total": 0, "totalPages": 0},
        }

    @pytest.mark.asyncio
    async def test_search_and_category(self, client: AsyncClient, auth_headers):
        await create_project(client, auth_headers, slug="shop", title="Online Shop")
        await create_project(client, auth_headers, slug="game", title="Space Game", category="Games")

        by_search = await client.get("/api/projects", params={"search": "shop"})
        by_category = await client.get("/api/projects", params={"category": "Games"})

        assert [p["slug"] for p in by_search.json()["projects"]] == ["shop"]
        assert [p["slug"] for p in by_category.json()["projects"]] == ["game"]

    @pytest.mark.asyncio
    async def test_sort_by_title(self, client: AsyncClient, auth_headers):
        for title in ("Beta", "Alpha", "Gamma"):
            await create_project(client, auth_headers, slug=title.lower(), title=title)

        response = await client.get("/api/projects", params={"sort_by": "title", "sort_order": "asc"})

        assert [p["title"] for p in response.json()["projects"]] == ["Alpha", "Beta", "Gamma"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [
        {"owner": "x"},
        {"sort_by": "password"},
        {"limit": "500"},
        {"page": "0"},
        {"sort_order": "up"},
    ])
    async def test_bad_query_rejected(self, client: AsyncClient, params):
        response = await client.get("/api/projects", params=params)

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestProjectOwnership:

    @pytest.mark.asyncio
    async def test_non_owner_cannot_update(self, client: AsyncClient, auth_headers, other_auth_headers):
        project = await create_project(client, auth_headers)

        response = await client.put(
            f"/api/projects/{project['project_id']}", headers=other_auth_headers, json={"title": "Hijacked"}
        )

        assert response.status_code == 403
        assert response.json()["error_code"] == "INSUFFICIENT_PERMISSIONS"

        unchanged = await client.get(f"/api/projects/{project['project_id']}")
        assert unchanged.json()["project"]["title"] == "E-commerce Platform"

    @pytest.mark.asyncio
    async def test_owner_can_update(self, client: AsyncClient, auth_headers):
        project = await create_project(client, auth_headers)

        response = await client.put(
            f"/api/projects/{project['project_id']}", headers=auth_headers, json={"title": "Renamed"}
        )

        assert response.status_code == 200
        assert response.json()["project"]["title"] == "Renamed"

    @pytest.mark.asyncio
    async def test_admin_can_update_and_slug_is_kept(self, client: AsyncClient, auth_headers, admin_auth_headers):
        project = await create_project(client, auth_headers)

        response = await client.put(
            f"/api/projects/{project['project_id']}", headers=admin_auth_headers, json={"title": "Edited by admin"}
        )

        assert response.status_code == 200
        updated = response.json()["project"]
        assert updated["title"] == "Edited by admin"
        assert updated["slug"] == project["slug"]
        assert updated["user_id"] == project["user_id"]

    @pytest.mark.asyncio
    async def test_update_missing_project_is_404_for_anyone(self, client: AsyncClient, other_auth_headers):
        response = await client.put("/api/projects/missing", headers=other_auth_headers, json={"title": "x"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_without_fields(self, client: AsyncClient, auth_headers):
        project = await create_project(client, auth_headers)

        response = await client.put(f"/api/projects/{project['project_id']}", headers=auth_headers, json={})

        assert response.status_code == 400
        assert response.json()["error_code"] == "NO_UPDATE_FIELDS"

    @pytest.mark.asyncio
    async def test_update_to_taken_slug(self, client: AsyncClient, auth_headers):
        await create_project(client, auth_headers, slug="first")
        second = await create_project(client, auth_headers, slug="second")

        response = await client.put(
            f"/api/projects/{second['project_id']}", headers=auth_headers, json={"slug": "first"}
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "SLUG_EXISTS"

    @pytest.mark.asyncio
    async def test_non_owner_cannot_delete(self, client: AsyncClient, auth_headers, other_auth_headers):
        project = await create_project(client, auth_headers)

        response = await client.delete(f"/api/projects/{project['project_id']}", headers=other_auth_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_delete_removes_gallery(self, client: AsyncClient, auth_headers):
        project = await create_project(client, auth_headers)
        image = await client.post(
            f"/api/projects/{project['project_id']}/gallery",
            headers=auth_headers,
            json={"image_url": "https://picsum.photos/seed/a/800/600"},
        )
        image_id = image.json()["gallery_image"]["image_id"]

        response = await client.delete(f"/api/projects/{project['project_id']}", headers=auth_headers)

        assert response.status_code == 200
        assert (await client.get(f"/api/projects/{project['project_id']}")).status_code == 404
        gone = await client.put(f"/api/gallery-images/{image_id}", headers=auth_headers, json={"caption": "x"})
        assert gone.status_code == 404
