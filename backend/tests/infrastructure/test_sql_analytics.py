"""SQL analytics and API key repositories against SQLite.

Tests:
    - grouped counts come back keyed by enum value, tenant-scoped
    - soft-deleted tasks and tasks of soft-deleted projects are excluded
    - project/member activity use outer joins (zero counts are kept)
    - API keys: revoked keys leave list_active but stay readable by id
"""

from teamhub.core.domain_types import ProjectStatus, Role, TaskPriority, TaskStatus


async def _project(projects, org_id, name):
    return await projects.insert({
        "organization_id": org_id, "name": name, "description": "",
        "status": ProjectStatus.ACTIVE, "member_ids": [], "created_by": "u1",
    })


async def _task(tasks, project_id, title, status=TaskStatus.TODO,
                priority=TaskPriority.MEDIUM, assignee_id=None):
    return await tasks.insert({
        "project_id": project_id, "title": title, "description": "",
        "status": status, "priority": priority, "assignee_id": assignee_id,
        "tags": [],
    })


async def test_grouped_counts_are_tenant_scoped(analytics, projects, tasks, org, other_org):
    apollo = await _project(projects, org.id, "Apollo")
    rival = await _project(projects, other_org.id, "Rival")
    await _task(tasks, apollo.id, "a1", TaskStatus.DONE, TaskPriority.HIGH)
    await _task(tasks, apollo.id, "a2", TaskStatus.DONE, TaskPriority.LOW)
    await _task(tasks, apollo.id, "a3", TaskStatus.TODO, TaskPriority.HIGH)
    await _task(tasks, rival.id, "r1", TaskStatus.IN_REVIEW)

    assert await analytics.task_counts_by_status(org.id) == {"DONE": 2, "TODO": 1}
    assert await analytics.task_counts_by_priority(org.id) == {"HIGH": 2, "LOW": 1}
    assert await analytics.task_counts_by_status(other_org.id) == {"IN_REVIEW": 1}


async def test_deleted_rows_do_not_count(analytics, projects, tasks, org):
    apollo = await _project(projects, org.id, "Apollo")
    gemini = await _project(projects, org.id, "Gemini")
    kept = await _task(tasks, apollo.id, "kept")
    dropped = await _task(tasks, apollo.id, "dropped")
    await _task(tasks, gemini.id, "orphaned")
    await tasks.soft_delete(dropped.id)
    await projects.soft_delete(gemini.id)

    assert await analytics.task_counts_by_status(org.id) == {"TODO": 1}
    recent = await analytics.recent_tasks(org.id, 10)
    assert [t.id for t in recent] == [kept.id]
    activity = await analytics.project_activity(org.id)
    assert [(p.name, p.task_count) for p in activity] == [("Apollo", 1)]


async def test_recent_tasks_newest_update_first(analytics, projects, tasks, org):
    apollo = await _project(projects, org.id, "Apollo")
    first = await _task(tasks, apollo.id, "first")
    await _task(tasks, apollo.id, "second")
    await _task(tasks, apollo.id, "third")
    await tasks.update(first.id, {"status": TaskStatus.IN_PROGRESS})

    recent = await analytics.recent_tasks(org.id, 2)

    assert [t.title for t in recent] == ["first", "third"]
    assert recent[0].status is TaskStatus.IN_PROGRESS


async def test_project_activity_keeps_empty_projects(analytics, projects, tasks, org):
    apollo = await _project(projects, org.id, "Apollo")
    await _project(projects, org.id, "Empty")
    await _task(tasks, apollo.id, "a1")
    await _task(tasks, apollo.id, "a2")

    activity = await analytics.project_activity(org.id)

    assert [(p.name, p.status, p.task_count) for p in activity] == [
        ("Apollo", ProjectStatus.ACTIVE, 2), ("Empty", ProjectStatus.ACTIVE, 0),
    ]


async def test_member_activity_counts_live_assignments(
    analytics, members, projects, tasks, org,
):
    busy = await members.insert({
        "organization_id": org.id, "email": "busy@acme.io", "name": "Busy",
        "role": Role.MEMBER,
    })
    await members.insert({
        "organization_id": org.id, "email": "idle@acme.io", "name": "Idle",
        "role": Role.VIEWER,
    })
    apollo = await _project(projects, org.id, "Apollo")
    await _task(tasks, apollo.id, "t1", assignee_id=busy.id)
    done = await _task(tasks, apollo.id, "t2", assignee_id=busy.id)
    await _task(tasks, apollo.id, "t3", assignee_id=busy.id)
    await tasks.soft_delete(done.id)

    activity = await analytics.member_activity(org.id)

    assert [(m.email, m.role, m.task_count) for m in activity] == [
        ("busy@acme.io", Role.MEMBER, 2), ("idle@acme.io", Role.VIEWER, 0),
    ]


# ─── api keys ───────────────────────────────────────────────────

async def test_api_key_lifecycle(api_keys, org, other_org):
    key = await api_keys.insert({
        "organization_id": org.id, "name": "CI", "hashed_key": "a" * 64,
        "prefix": "thub_abcdefg", "created_by": "u1",
    })
    await api_keys.insert({
        "organization_id": other_org.id, "name": "theirs", "hashed_key": "b" * 64,
        "prefix": "thub_hijklmn",
    })
    assert key.created_at is not None
    assert [k.id for k in await api_keys.list_active(org.id)] == [key.id]

    await api_keys.update(key.id, {"revoked_at": key.created_at})

    assert await api_keys.list_active(org.id) == []
    assert (await api_keys.get(key.id)).revoked_at is not None
    assert await api_keys.get("missing") is None
