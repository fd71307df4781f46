"""Task Routes — create/filter/status, tenant isolation through the owning project."""

import pytest


@pytest.fixture
async def project_id(client, tenant):
    _, headers = tenant
    response = await client.post("/api/v1/projects", json={"name": "Apollo"}, headers=headers)
    return response.json()["id"]


async def _task(client, headers, project_id, title, **extra):
    response = await client.post(
        "/api/v1/tasks", json={"projectId": project_id, "title": title, **extra},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_task_defaults(client, tenant, project_id):
    _, headers = tenant
    task = await _task(client, headers, project_id, "Write docs", dueDate="2024-03-01")

    assert task["status"] == "TODO"
    assert task["priority"] == "MEDIUM"
    assert task["dueDate"] == "2024-03-01"
    assert task["projectId"] == project_id


async def test_assignee_must_be_project_member(client, tenant, project_id):
    _, headers = tenant
    ok = await _task(client, headers, project_id, "mine", assigneeId="owner-1")
    assert ok["assigneeId"] == "owner-1"

    response = await client.post(
        "/api/v1/tasks",
        json={"projectId": project_id, "title": "theirs", "assigneeId": "stranger"},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Assignee is not a member of this project"


async def test_invalid_priority_is_validation_error(client, tenant, project_id):
    _, headers = tenant
    response = await client.post(
        "/api/v1/tasks",
        json={"projectId": project_id, "title": "x", "priority": "CRITICAL"},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_list_filters(client, tenant, project_id):
    _, headers = tenant
    await _task(client, headers, project_id, "Fix login", priority="URGENT")
    await _task(client, headers, project_id, "Write docs", priority="LOW")

    by_priority = await client.get(
        f"/api/v1/tasks?projectId={project_id}&priority=URGENT", headers=headers,
    )
    assert [t["title"] for t in by_priority.json()["data"]] == ["Fix login"]

    org_wide = await client.get("/api/v1/tasks?search=DOCS", headers=headers)
    assert [t["title"] for t in org_wide.json()["data"]] == ["Write docs"]
    assert org_wide.json()["pagination"]["totalItems"] == 1


async def test_due_date_filter_is_half_open(client, tenant, project_id):
    _, headers = tenant
    for day in ("2024-01-01", "2024-01-15", "2024-01-31"):
        await _task(client, headers, project_id, day, dueDate=day)

    response = await client.get(
        f"/api/v1/tasks/filter?projectId={project_id}"
        "&startDate=2024-01-01&endDate=2024-01-31",
        headers=headers,
    )

    body = response.json()
    assert [t["dueDate"] for t in body["data"]] == ["2024-01-01", "2024-01-15"]
    assert body["pagination"]["totalItems"] == 2


async def test_due_date_filter_rejects_bad_dates(client, tenant, project_id):
    _, headers = tenant
    response = await client.get(
        f"/api/v1/tasks/filter?projectId={project_id}&startDate=soon&endDate=2024-01-31",
        headers=headers,
    )
    assert response.status_code == 400


async def test_status_change(client, tenant, project_id):
    _, headers = tenant
    task = await _task(client, headers, project_id, "Ship it")

    moved = await client.patch(
        f"/api/v1/tasks/{task['id']}/status", json={"status": "DONE"}, headers=headers,
    )
    assert moved.json()["status"] == "DONE"

    invalid = await client.patch(
        f"/api/v1/tasks/{task['id']}/status", json={"status": "FINISHED"}, headers=headers,
    )
    assert invalid.status_code == 400


async def test_update_and_delete(client, tenant, project_id):
    _, headers = tenant
    task = await _task(client, headers, project_id, "Draft", tags=["a"])

    updated = await client.put(
        f"/api/v1/tasks/{task['id']}", json={"title": "Final", "tags": ["b"]},
        headers=headers,
    )
    assert updated.json()["title"] == "Final"
    assert updated.json()["tags"] == ["b"]

    assert (await client.delete(f"/api/v1/tasks/{task['id']}", headers=headers)).status_code == 204
    missing = await client.get(f"/api/v1/tasks/{task['id']}", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["error"]["message"] == "Task not found"


async def test_other_tenant_cannot_reach_task(client, tenant, rival, project_id):
    _, headers = tenant
    _, rival_headers = rival
    task = await _task(client, headers, project_id, "Private")

    response = await client.get(f"/api/v1/tasks/{task['id']}", headers=rival_headers)
    assert response.status_code == 403

    listing = await client.get("/api/v1/tasks", headers=rival_headers)
    assert listing.json()["data"] == []


async def test_null_description_is_stored_as_empty(client, tenant, project_id):
    _, headers = tenant
    task = await _task(client, headers, project_id, "Outline", description="v1")

    updated = await client.put(
        f"/api/v1/tasks/{task['id']}", json={"description": None}, headers=headers,
    )
    assert updated.status_code == 200, updated.text
    assert updated.json()["description"] == ""
    assert updated.json()["title"] == "Outline"
