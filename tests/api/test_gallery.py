"""
API Tests for project gallery images
"""
import pytest
from httpx import AsyncClient

from tests.conftest import project_payload


@pytest.fixture
def image_body():
    return {"image_url": "https://picsum.photos/seed/gallery/800/600", "caption": "Checkout", "sort_order": 1}


async def make_project(client: AsyncClient, headers: dict) -> str:
    response = await client.post("/api/projects", headers=headers, json=project_payload())
    return response.json()["project"]["project_id"]


@pytest.mark.asyncio
async def test_owner_adds_and_lists_images(client: AsyncClient, auth_headers, image_body):
    project_id = await make_project(client, auth_headers)

    created = await client.post(f"/api/projects/{project_id}/gallery", headers=auth_headers, json=image_body)
    await client.post(
        f"/api/projects/{project_id}/gallery",
        headers=auth_headers,
        json={"image_url": "https://picsum.photos/seed/first/800/600", "sort_order": 0},
    )

    assert created.status_code == 201
    listing = await client.get(f"/api/projects/{project_id}/gallery")
    assert listing.status_code == 200
    assert [img["sort_order"] for img in listing.json()["gallery_images"]] == [0, 1]
    assert listing.json()["pagination"]["limit"] == 100


@pytest.mark.asyncio
async def test_non_owner_cannot_add(client: AsyncClient, auth_headers, other_auth_headers, image_body):
    project_id = await make_project(client, auth_headers)

    response = await client.post(f"/api/projects/{project_id}/gallery", headers=other_auth_headers, json=image_body)

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_add_to_missing_project(client: AsyncClient, auth_headers, image_body):
    response = await client.post("/api/projects/nope/gallery", headers=auth_headers, json=image_body)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_image_permissions_follow_project(client: AsyncClient, auth_headers, other_auth_headers,
                                                admin_auth_headers, image_body):
    project_id = await make_project(client, auth_headers)
    created = await client.post(f"/api/projects/{project_id}/gallery", headers=auth_headers, json=image_body)
    image_id = created.json()["gallery_image"]["image_id"]

    denied = await client.put(f"/api/gallery-images/{image_id}", headers=other_auth_headers, json={"caption": "x"})
    by_owner = await client.put(f"/api/gallery-images/{image_id}", headers=auth_headers, json={"caption": "Cart"})
    by_admin = await client.delete(f"/api/gallery-images/{image_id}", headers=admin_auth_headers)

    assert denied.status_code == 403
    assert by_owner.status_code == 200
    assert by_owner.json()["gallery_image"]["caption"] == "Cart"
    assert by_admin.status_code == 200


@pytest.mark.asyncio
async def test_invalid_image_url(client: AsyncClient, auth_headers):
    project_id = await make_project(client, auth_headers)

    response = await client.post(
        f"/api/projects/{project_id}/gallery", headers=auth_headers, json={"image_url": "nope"}
    )

    assert response.status_code == 400
