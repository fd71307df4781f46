"""Analytics & API Key Routes — tenant-scoped reporting and key management."""

import pytest


@pytest.fixture
async def board(client, tenant):
    _, headers = tenant
    project = await client.post("/api/v1/projects", json={"name": "Apollo"}, headers=headers)
    project_id = project.json()["id"]
    for title, priority in [("a1", "HIGH"), ("a2", "LOW"), ("a3", "HIGH")]:
        created = await client.post(
            "/api/v1/tasks",
            json={"projectId": project_id, "title": title, "priority": priority,
                  "assigneeId": "owner-1"},
            headers=headers,
        )
        assert created.status_code == 201, created.text
    return project_id


async def test_analytics_require_tenant(client, bearer):
    assert (await client.get("/api/v1/analytics/dashboard")).status_code == 401
    no_tenant = await client.get("/api/v1/analytics/tasks", headers=bearer("drifter"))
    assert no_tenant.status_code == 403


async def test_task_analytics(client, tenant, board):
    _, headers = tenant
    response = await client.get("/api/v1/analytics/tasks", headers=headers)

    assert response.status_code == 200
    assert response.json() == {
        "byStatus": {"TODO": 3, "IN_PROGRESS": 0, "IN_REVIEW": 0, "DONE": 0},
        "byPriority": {"LOW": 1, "MEDIUM": 0, "HIGH": 2, "URGENT": 0},
        "total": 3,
    }


async def test_dashboard_and_member_activity(client, tenant, rival, board):
    _, headers = tenant
    dashboard = (await client.get("/api/v1/analytics/dashboard", headers=headers)).json()

    assert dashboard["tasks"]["total"] == 3
    assert len(dashboard["recentActivity"]) == 3
    assert {"id", "projectId", "title", "status", "updatedAt"} <= set(dashboard["recentActivity"][0])
    assert dashboard["projectActivity"] == [
        {"id": board, "name": "Apollo", "status": "ACTIVE", "taskCount": 3},
    ]

    members = (await client.get("/api/v1/analytics/members", headers=headers)).json()
    assert [(m["email"], m["taskCount"]) for m in members["data"]] == [("olivia@acme.io", 3)]

    _, rival_headers = rival
    theirs = (await client.get("/api/v1/analytics/dashboard", headers=rival_headers)).json()
    assert theirs["tasks"]["total"] == 0
    assert theirs["projectActivity"] == []


async def test_api_key_lifecycle(client, tenant):
    _, headers = tenant
    created = await client.post("/api/v1/api-keys", json={"name": "CI"}, headers=headers)
    assert created.status_code == 201, created.text
    body = created.json()
    assert body["secretKey"].startswith("thub_")
    assert body["prefix"] == body["secretKey"][:12]
    assert "hashedKey" not in body

    fetched = await client.get(f"/api/v1/api-keys/{body['id']}", headers=headers)
    assert fetched.status_code == 200
    assert "secretKey" not in fetched.json()
    assert "hashedKey" not in fetched.json()

    listing = (await client.get("/api/v1/api-keys", headers=headers)).json()
    assert [k["id"] for k in listing["data"]] == [body["id"]]

    revoked = await client.delete(f"/api/v1/api-keys/{body['id']}", headers=headers)
    assert revoked.status_code == 204
    assert (await client.get("/api/v1/api-keys", headers=headers)).json() == {"data": []}
    again = await client.get(f"/api/v1/api-keys/{body['id']}", headers=headers)
    assert again.json()["revokedAt"] is not None


async def test_api_key_requires_name(client, tenant):
    _, headers = tenant
    response = await client.post("/api/v1/api-keys", json={"name": " "}, headers=headers)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_api_key_of_other_tenant_is_not_found(client, tenant, rival):
    _, headers = tenant
    created = await client.post("/api/v1/api-keys", json={"name": "CI"}, headers=headers)
    key_id = created.json()["id"]

    _, rival_headers = rival
    assert (await client.get(f"/api/v1/api-keys/{key_id}", headers=rival_headers)).status_code == 404
    assert (await client.delete(f"/api/v1/api-keys/{key_id}", headers=rival_headers)).status_code == 404
