from datetime import datetime, timedelta

from database.models import Project
from tests.conftest import make_token


async def _create(client, auth_headers, project_payload, **overrides):
    return await client.post(
        "/api/projects",
        json=project_payload(**overrides),
        headers=auth_headers(overrides.get("author", "owner-1")),
    )


async def test_create_requires_token(client, project_payload):
    resp = await client.post("/api/projects", json=project_payload())
    assert resp.status_code == 401
    assert resp.json() == {"error": "Authentication required"}


async def test_create_rejects_refresh_token(client, project_payload):
    token = make_token("owner-1", token_type="refresh")
    resp = await client.post(
        "/api/projects", json=project_payload(), headers={"Authorization": f"Bearer {token}"}
    )
    assert resp.status_code == 401


async def test_create_project(client, auth_headers, project_payload):
    resp = await _create(client, auth_headers, project_payload)
    assert resp.status_code == 201
    body = resp.json()
    assert body["slug"] == "dashboard-rewrite"
    assert body["status"] == "ongoing"
    assert body["currency"] == "USD"
    assert body["milestones"][0]["name"] == "Kickoff"
    assert body["imageUrl"] is None
    assert isinstance(body["_id"], str)

    stored = await Project.find_one({"slug": "dashboard-rewrite"})
    assert stored.author == "owner-1"
    assert stored.tech_stack == ["FastAPI", "MongoDB"]


async def test_create_for_someone_else_is_forbidden(client, auth_headers, project_payload):
    resp = await client.post(
        "/api/projects", json=project_payload(author="owner-2"), headers=auth_headers("owner-1")
    )
    assert resp.status_code == 403


async def test_duplicate_slug(client, auth_headers, project_payload):
    assert (await _create(client, auth_headers, project_payload)).status_code == 201
    resp = await _create(client, auth_headers, project_payload, title="Another one")
    assert resp.status_code == 400
    assert "slug" in resp.json()["error"]


async def test_create_validation(client, auth_headers, project_payload):
    resp = await _create(client, auth_headers, project_payload, category="Games")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid category"}


async def _seed(count):
    base = datetime(2024, 3, 1)
    for i in range(count):
        await Project(
            title=f"Project {i}",
            author="owner-1",
            client="Acme",
            description="Mobile banking app" if i == 0 else "Internal tooling work",
            category="Backend",
            slug=f"project-{i}",
            created_at=base + timedelta(days=i),
            updated_at=base + timedelta(days=i),
        ).insert()


async def test_list_projects(client, db):
    await _seed(3)
    resp = await client.get("/api/projects", params={"page": 1, "limit": 2})
    assert resp.status_code == 200
    body = resp.json()
    assert body["totalPages"] == 2
    assert body["currentPage"] == 1
    assert [p["slug"] for p in body["projects"]] == ["project-2", "project-1"]


async def test_search_projects(client, db):
    await _seed(3)
    resp = await client.get("/api/projects", params={"search": "BANKING"})
    assert [p["slug"] for p in resp.json()["projects"]] == ["project-0"]


async def test_list_projects_bad_limit(client, db):
    resp = await client.get("/api/projects", params={"limit": 0})
    assert resp.status_code == 400


async def test_get_by_slug(client, db):
    await _seed(1)
    resp = await client.get("/api/projects/slug/project-0")
    assert resp.status_code == 200
    assert resp.json()["title"] == "Project 0"

    resp = await client.get("/api/projects/slug/missing")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Project not found"}


async def test_update_project(client, auth_headers, project_payload):
    created = (await _create(client, auth_headers, project_payload)).json()
    before = (await client.get("/api/projects/slug/dashboard-rewrite")).json()
    update = project_payload(title="Dashboard v2", status="completed")
    del update["author"]

    resp = await client.put(
        f"/api/projects/{created['_id']}", json=update, headers={"x-user-id": "owner-1"}
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Dashboard v2"
    assert body["status"] == "completed"
    assert body["author"] == "owner-1"
    assert body["createdAt"] == before["createdAt"]


async def test_update_requires_owner_header(client, auth_headers, project_payload):
    created = (await _create(client, auth_headers, project_payload)).json()
    resp = await client.put(f"/api/projects/{created['_id']}", json=project_payload())
    assert resp.status_code == 403
    resp = await client.put(
        f"/api/projects/{created['_id']}", json=project_payload(), headers={"x-user-id": "intruder"}
    )
    assert resp.status_code == 403


async def test_update_slug_conflict(client, auth_headers, project_payload):
    first = (await _create(client, auth_headers, project_payload)).json()
    await _create(client, auth_headers, project_payload, slug="other-project")
    resp = await client.put(
        f"/api/projects/{first['_id']}",
        json=project_payload(slug="other-project"),
        headers={"x-user-id": "owner-1"},
    )
    assert resp.status_code == 400


async def test_update_invalid_and_missing_id(client, db, project_payload):
    resp = await client.put("/api/projects/nope", json=project_payload(), headers={"x-user-id": "owner-1"})
    assert resp.status_code == 400
    resp = await client.put(
        "/api/projects/65a1b2c3d4e5f60718293a4b", json=project_payload(), headers={"x-user-id": "owner-1"}
    )
    assert resp.status_code == 404


async def test_delete_project(client, auth_headers, project_payload):
    created = (await _create(client, auth_headers, project_payload)).json()

    resp = await client.delete(f"/api/projects/{created['_id']}", headers={"x-user-id": "intruder"})
    assert resp.status_code == 403

    resp = await client.delete(f"/api/projects/{created['_id']}", headers={"x-user-id": "owner-1"})
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert await Project.find_all().count() == 0

    resp = await client.delete(f"/api/projects/{created['_id']}", headers={"x-user-id": "owner-1"})
    assert resp.status_code == 404
