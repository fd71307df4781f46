"""In-memory implementations of the repository and notifier protocols.

Invariants:
    - Same observable contract as infrastructure/repositories.py: soft-deleted rows
      are invisible, update/soft_delete on unknown ids are no-ops
    - Reads return copies, so services cannot mutate stored state by accident
    - update() stamps updated_at on entities that carry one, like the ORM onupdate
"""

import copy
import uuid
from collections import Counter
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from teamhub.core.domain_types import (
    BillingTier, ProjectStatus, Role, TaskPriority, TaskStatus, parse_enum,
)
from teamhub.core.entities import (
    ApiKey, BillingPlan, Member, MemberActivity, Organization, Project,
    ProjectActivity, Task, TaskQuery,
)

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class _Clock:
    """Strictly increasing timestamps so created_at ordering is deterministic."""

    def __init__(self):
        self._ticks = 0

    def now(self) -> datetime:
        self._ticks += 1
        return _EPOCH + timedelta(seconds=self._ticks)


class _InMemoryRepository:
    entity_type: type = None

    def __init__(self, clock: _Clock | None = None):
        self.rows: dict[str, object] = {}
        self._clock = clock or _Clock()

    def _live(self):
        return [r for r in self.rows.values() if getattr(r, "deleted_at", None) is None]

    async def get(self, entity_id: str):
        row = self.rows.get(entity_id)
        if row is None or getattr(row, "deleted_at", None) is not None:
            return None
        return copy.deepcopy(row)

    async def insert(self, fields: dict):
        data = dict(fields)
        data.setdefault("id", str(uuid.uuid4()))
        data.setdefault("created_at", self._clock.now())
        row = self.entity_type(**data)
        self.rows[row.id] = row
        return copy.deepcopy(row)

    async def update(self, entity_id: str, fields: dict) -> None:
        row = self.rows.get(entity_id)
        if row is None or getattr(row, "deleted_at", None) is not None:
            return
        if hasattr(row, "updated_at") and "deleted_at" not in fields:
            fields = {**fields, "updated_at": self._clock.now()}
        self.rows[entity_id] = replace(row, **fields)

    async def soft_delete(self, entity_id: str) -> None:
        await self.update(entity_id, {"deleted_at": self._clock.now()})


class FakeOrganizationRepository(_InMemoryRepository):
    entity_type = Organization

    async def find_by_slug(self, slug: str):
        for row in self._live():
            if row.slug == slug:
                return copy.deepcopy(row)
        return None


class FakeMemberRepository(_InMemoryRepository):
    entity_type = Member

    async def find_by_email(self, email: str, organization_id: str):
        for row in self._live():
            if row.email == email and row.organization_id == organization_id:
                return copy.deepcopy(row)
        return None

    def _in_org(self, organization_id: str):
        rows = [r for r in self._live() if r.organization_id == organization_id]
        return sorted(rows, key=lambda r: r.created_at, reverse=True)

    async def list_by_organization(self, organization_id: str, skip: int, limit: int):
        return copy.deepcopy(self._in_org(organization_id)[skip:skip + limit])

    async def count_by_organization(self, organization_id: str) -> int:
        return len(self._in_org(organization_id))


class FakeProjectRepository(_InMemoryRepository):
    entity_type = Project

    def __init__(self, clock: _Clock | None = None):
        super().__init__(clock)
        self.failing_updates: set[str] = set()

    async def update(self, entity_id: str, fields: dict) -> None:
        if entity_id in self.failing_updates:
            raise RuntimeError(f"write rejected for {entity_id}")
        await super().update(entity_id, fields)

    def _in_org(self, organization_id: str, status: ProjectStatus | None = None):
        rows = [
            r for r in self._live()
            if r.organization_id == organization_id
            and (status is None or r.status is status)
        ]
        return sorted(rows, key=lambda r: r.created_at, reverse=True)

    async def list_by_organization(self, organization_id: str, skip: int, limit: int):
        return copy.deepcopy(self._in_org(organization_id)[skip:skip + limit])

    async def count_by_organization(self, organization_id: str) -> int:
        return len(self._in_org(organization_id))

    async def list_ids_by_organization(self, organization_id: str):
        return [r.id for r in self._in_org(organization_id)]

    async def list_by_status(self, organization_id, status, skip, limit):
        return copy.deepcopy(self._in_org(organization_id, status)[skip:skip + limit])

    async def count_by_status(self, organization_id, status) -> int:
        return len(self._in_org(organization_id, status))


def _matches(task: Task, query: TaskQuery) -> bool:
    if query.project_ids is not None and task.project_id not in query.project_ids:
        return False
    if query.status is not None and task.status is not query.status:
        return False
    if query.priority is not None and task.priority is not query.priority:
        return False
    if query.title_contains and query.title_contains.lower() not in task.title.lower():
        return False
    if query.due_from is not None and (task.due_date is None or task.due_date < query.due_from):
        return False
    if query.due_before is not None and (task.due_date is None or task.due_date >= query.due_before):
        return False
    return True


class FakeTaskRepository(_InMemoryRepository):
    entity_type = Task

    def _select(self, query: TaskQuery):
        rows = [t for t in self._live() if _matches(t, query)]
        return sorted(rows, key=lambda t: t.created_at, reverse=True)

    async def list(self, query: TaskQuery, skip: int, limit: int):
        return copy.deepcopy(self._select(query)[skip:skip + limit])

    async def count(self, query: TaskQuery) -> int:
        return len(self._select(query))


class FakeBillingPlanRepository:

    def __init__(self, plans: list[BillingPlan] | None = None):
        self.plans = {p.id: p for p in plans or []}

    async def get(self, plan_id: str):
        return copy.deepcopy(self.plans.get(plan_id))

    async def find_by_tier(self, tier: str):
        key = parse_enum(BillingTier, tier)
        for plan in self.plans.values():
            if plan.tier is key:
                return copy.deepcopy(plan)
        return None


class FakeApiKeyRepository(_InMemoryRepository):
    entity_type = ApiKey

    async def list_active(self, organization_id: str):
        rows = [
            r for r in self.rows.values()
            if r.organization_id == organization_id and r.revoked_at is None
        ]
        return copy.deepcopy(sorted(rows, key=lambda r: r.created_at, reverse=True))


class FakeAnalyticsRepository:
    """Computes the analytics aggregates from the other fake repositories."""

    def __init__(self, projects, tasks, members):
        self._projects = projects
        self._tasks = tasks
        self._members = members

    def _live_tasks(self, organization_id: str) -> list[Task]:
        project_ids = {
            p.id for p in self._projects._live() if p.organization_id == organization_id
        }
        return [t for t in self._tasks._live() if t.project_id in project_ids]

    async def task_counts_by_status(self, organization_id: str):
        return dict(Counter(t.status.value for t in self._live_tasks(organization_id)))

    async def task_counts_by_priority(self, organization_id: str):
        return dict(Counter(t.priority.value for t in self._live_tasks(organization_id)))

    async def recent_tasks(self, organization_id: str, limit: int):
        rows = sorted(
            self._live_tasks(organization_id),
            key=lambda t: t.updated_at or t.created_at, reverse=True,
        )
        return copy.deepcopy(rows[:limit])

    async def project_activity(self, organization_id: str):
        per_project = Counter(t.project_id for t in self._live_tasks(organization_id))
        rows = [
            ProjectActivity(p.id, p.name, p.status, per_project[p.id])
            for p in self._projects._live() if p.organization_id == organization_id
        ]
        return sorted(rows, key=lambda r: (-r.task_count, r.name))

    async def member_activity(self, organization_id: str):
        per_member = Counter(t.assignee_id for t in self._live_tasks(organization_id))
        rows = [
            MemberActivity(m.id, m.name, m.email, m.role, per_member[m.id])
            for m in self._members._live() if m.organization_id == organization_id
        ]
        return sorted(rows, key=lambda r: (-r.task_count, r.email))


class RecordingNotifier:
    """Records every event; raises on delivery when fail=True."""

    def __init__(self, fail: bool = False):
        self.events: list[tuple] = []
        self.fail = fail

    async def _record(self, *event):
        self.events.append(event)
        if self.fail:
            raise ConnectionError("notifier offline")

    async def member_invited(self, email, organization_name):
        await self._record("member_invited", email, organization_name)

    async def member_removed(self, email, organization_name):
        await self._record("member_removed", email, organization_name)

    async def task_assigned(self, assignee_id, task_title, project_name):
        await self._record("task_assigned", assignee_id, task_title, project_name)

    async def task_status_changed(self, task_title, old_status, new_status):
        await self._record("task_status_changed", task_title, old_status, new_status)


class FakeStore:
    """Bundle of fake repositories sharing one clock, plus seeding helpers."""

    def __init__(self, plans: list[BillingPlan] | None = None):
        clock = _Clock()
        self.organizations = FakeOrganizationRepository(clock)
        self.members = FakeMemberRepository(clock)
        self.projects = FakeProjectRepository(clock)
        self.tasks = FakeTaskRepository(clock)
        self.plans = FakeBillingPlanRepository(plans)
        self.api_keys = FakeApiKeyRepository(clock)
        self.analytics = FakeAnalyticsRepository(self.projects, self.tasks, self.members)

    async def seed_organization(self, name: str = "Acme", plan_id: str = "free") -> Organization:
        return await self.organizations.insert({
            "name": name, "slug": name.lower(), "billing_plan_id": plan_id,
            "settings": {},
        })

    async def seed_member(
        self, organization_id: str, role: Role = Role.MEMBER,
        email: str | None = None, member_id: str | None = None,
    ) -> Member:
        fields = {
            "organization_id": organization_id,
            "email": email or f"{uuid.uuid4().hex[:8]}@example.com",
            "name": "Seeded",
            "role": role,
        }
        if member_id is not None:
            fields["id"] = member_id
        return await self.members.insert(fields)

    async def seed_project(
        self, organization_id: str, name: str = "Project",
        status: ProjectStatus = ProjectStatus.ACTIVE,
        member_ids: list[str] | None = None,
    ) -> Project:
        return await self.projects.insert({
            "organization_id": organization_id, "name": name, "description": "",
            "status": status, "member_ids": list(member_ids or []),
        })

    async def seed_task(
        self, project_id: str, title: str = "Task",
        status: TaskStatus = TaskStatus.TODO,
        priority: TaskPriority = TaskPriority.MEDIUM,
        assignee_id: str | None = None,
    ) -> Task:
        return await self.tasks.insert({
            "project_id": project_id, "title": title, "description": "",
            "status": status, "priority": priority, "assignee_id": assignee_id,
        })
