"""SQL Repositories — SQLAlchemy implementations of the core repository protocols.

Invariants:
    - Every public method opens and closes its own session (one unit of work per call)
    - Every read filters deleted_at IS NULL, point lookups included
    - ORM rows never escape this module; callers receive core.entities dataclasses
    - update()/soft_delete() on a missing or soft-deleted id are silent no-ops

Design Decisions:
    - Per-call sessions over a request-scoped session: ArchiveEngine and BillingPolicy
      fan out with asyncio.gather, and an AsyncSession must not be shared across
      concurrent coroutines
    - Title search uses ILIKE with autoescape so user input cannot inject wildcards
    - Analytics group and count in SQL (func.count + GROUP BY); only live tasks
      under live projects are counted
"""

import logging
from typing import Any

from sqlalchemy import and_, func, select, update

from teamhub.core.domain_types import BillingTier, ProjectStatus, parse_enum
from teamhub.core.entities import (
    ApiKey, BillingPlan, Member, MemberActivity, Organization, Project,
    ProjectActivity, Task, TaskQuery,
)
from teamhub.infrastructure.database import DatabaseSessionManager
from teamhub.models import (
    ApiKeyRow, BillingPlanRow, MemberRow, OrganizationRow, ProjectRow, TaskRow,
)
from teamhub.models._columns import utcnow

logger = logging.getLogger(__name__)


# ─── Row -> entity mapping ──────────────────────────────────────

def _to_organization(row: OrganizationRow) -> Organization:
    return Organization(
        id=row.id, name=row.name, slug=row.slug,
        billing_plan_id=row.billing_plan_id, settings=dict(row.settings or {}),
        created_at=row.created_at, updated_at=row.updated_at,
    )


def _to_member(row: MemberRow) -> Member:
    return Member(
        id=row.id, organization_id=row.organization_id, email=row.email,
        name=row.name, role=row.role, invited_at=row.invited_at,
        joined_at=row.joined_at, created_at=row.created_at,
        deleted_at=row.deleted_at,
    )


def _to_project(row: ProjectRow) -> Project:
    return Project(
        id=row.id, organization_id=row.organization_id, name=row.name,
        description=row.description, status=row.status,
        member_ids=list(row.member_ids or []), created_by=row.created_by,
        archived_by=row.archived_by, archived_at=row.archived_at,
        restored_by=row.restored_by, restored_at=row.restored_at,
        created_at=row.created_at, updated_at=row.updated_at,
        deleted_at=row.deleted_at,
    )


def _to_task(row: TaskRow) -> Task:
    return Task(
        id=row.id, project_id=row.project_id, title=row.title,
        description=row.description, status=row.status, priority=row.priority,
        assignee_id=row.assignee_id, due_date=row.due_date,
        tags=list(row.tags or []), created_by=row.created_by,
        created_at=row.created_at, updated_at=row.updated_at,
        deleted_at=row.deleted_at,
    )


def _to_plan(row: BillingPlanRow) -> BillingPlan:
    return BillingPlan(
        id=row.id, name=row.name, tier=row.tier, max_members=row.max_members,
        max_projects=row.max_projects, price_per_month=row.price_per_month,
        features=list(row.features or []),
    )


def _to_api_key(row: ApiKeyRow) -> ApiKey:
    return ApiKey(
        id=row.id, organization_id=row.organization_id, name=row.name,
        hashed_key=row.hashed_key, prefix=row.prefix, created_by=row.created_by,
        created_at=row.created_at, last_used_at=row.last_used_at,
        revoked_at=row.revoked_at,
    )


# ─── Shared CRUD ────────────────────────────────────────────────

class _SqlRepository:
    """Point lookup, insert, partial update and soft delete for one row type."""

    row_type: type = None

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    def _to_entity(self, row):
        raise NotImplementedError

    def _live(self):
        return self.row_type.deleted_at.is_(None)

    async def get(self, entity_id: str):
        async with self._db.session() as session:
            row = await session.scalar(
                select(self.row_type).where(self.row_type.id == entity_id, self._live()),
            )
            return self._to_entity(row) if row is not None else None

    async def insert(self, fields: dict[str, Any]):
        async with self._db.session() as session:
            row = self.row_type(**fields)
            session.add(row)
            await session.commit()
            await session.refresh(row)
            return self._to_entity(row)

    async def update(self, entity_id: str, fields: dict[str, Any]) -> None:
        if not fields:
            return
        async with self._db.session() as session:
            await session.execute(
                update(self.row_type)
                .where(self.row_type.id == entity_id, self._live())
                .values(**fields),
            )
            await session.commit()

    async def soft_delete(self, entity_id: str) -> None:
        await self.update(entity_id, {"deleted_at": utcnow()})

    async def _fetch_all(self, statement) -> list:
        async with self._db.session() as session:
            rows = (await session.scalars(statement)).all()
            return [self._to_entity(row) for row in rows]

    async def _count(self, *conditions) -> int:
        async with self._db.session() as session:
            total = await session.scalar(
                select(func.count()).select_from(self.row_type)
                .where(self._live(), *conditions),
            )
            return total or 0


# ─── Concrete repositories ─────────────────────────────────────

class SqlOrganizationRepository(_SqlRepository):
    row_type = OrganizationRow

    def _to_entity(self, row: OrganizationRow) -> Organization:
        return _to_organization(row)

    async def find_by_slug(self, slug: str) -> Organization | None:
        async with self._db.session() as session:
            row = await session.scalar(
                select(OrganizationRow)
                .where(OrganizationRow.slug == slug, self._live()),
            )
            return _to_organization(row) if row is not None else None


class SqlMemberRepository(_SqlRepository):
    row_type = MemberRow

    def _to_entity(self, row: MemberRow) -> Member:
        return _to_member(row)

    async def find_by_email(
        self, email: str, organization_id: str,
    ) -> Member | None:
        async with self._db.session() as session:
            row = await session.scalar(
                select(MemberRow).where(
                    MemberRow.email == email,
                    MemberRow.organization_id == organization_id,
                    self._live(),
                ),
            )
            return _to_member(row) if row is not None else None

    async def list_by_organization(
        self, organization_id: str, skip: int, limit: int,
    ) -> list[Member]:
        return await self._fetch_all(
            select(MemberRow)
            .where(MemberRow.organization_id == organization_id, self._live())
            .order_by(MemberRow.created_at.desc(), MemberRow.id)
            .offset(skip).limit(limit),
        )

    async def count_by_organization(self, organization_id: str) -> int:
        return await self._count(MemberRow.organization_id == organization_id)


class SqlProjectRepository(_SqlRepository):
    row_type = ProjectRow

    def _to_entity(self, row: ProjectRow) -> Project:
        return _to_project(row)

    async def list_by_organization(
        self, organization_id: str, skip: int, limit: int,
    ) -> list[Project]:
        return await self._fetch_all(
            select(ProjectRow)
            .where(ProjectRow.organization_id == organization_id, self._live())
            .order_by(ProjectRow.created_at.desc(), ProjectRow.id)
            .offset(skip).limit(limit),
        )

    async def count_by_organization(self, organization_id: str) -> int:
        return await self._count(ProjectRow.organization_id == organization_id)

    async def list_ids_by_organization(self, organization_id: str) -> list[str]:
        async with self._db.session() as session:
            ids = await session.scalars(
                select(ProjectRow.id)
                .where(ProjectRow.organization_id == organization_id, self._live()),
            )
            return list(ids.all())

    async def list_by_status(
        self, organization_id: str, status: ProjectStatus, skip: int, limit: int,
    ) -> list[Project]:
        return await self._fetch_all(
            select(ProjectRow)
            .where(
                ProjectRow.organization_id == organization_id,
                ProjectRow.status == status,
                self._live(),
            )
            .order_by(ProjectRow.updated_at.desc(), ProjectRow.id)
            .offset(skip).limit(limit),
        )

    async def count_by_status(
        self, organization_id: str, status: ProjectStatus,
    ) -> int:
        return await self._count(
            ProjectRow.organization_id == organization_id,
            ProjectRow.status == status,
        )


def _task_conditions(query: TaskQuery) -> list:
    conditions = []
    if query.project_ids is not None:
        conditions.append(TaskRow.project_id.in_(query.project_ids))
    if query.status is not None:
        conditions.append(TaskRow.status == query.status)
    if query.priority is not None:
        conditions.append(TaskRow.priority == query.priority)
    if query.title_contains:
        conditions.append(TaskRow.title.icontains(query.title_contains, autoescape=True))
    if query.due_from is not None:
        conditions.append(TaskRow.due_date >= query.due_from)
    if query.due_before is not None:
        conditions.append(TaskRow.due_date < query.due_before)
    return conditions


class SqlTaskRepository(_SqlRepository):
    row_type = TaskRow

    def _to_entity(self, row: TaskRow) -> Task:
        return _to_task(row)

    async def list(self, query: TaskQuery, skip: int, limit: int) -> list[Task]:
        if query.due_from is not None or query.due_before is not None:
            ordering = (TaskRow.due_date.asc(), TaskRow.id)
        else:
            ordering = (TaskRow.created_at.desc(), TaskRow.id)
        return await self._fetch_all(
            select(TaskRow)
            .where(self._live(), *_task_conditions(query))
            .order_by(*ordering)
            .offset(skip).limit(limit),
        )

    async def count(self, query: TaskQuery) -> int:
        return await self._count(*_task_conditions(query))


class SqlBillingPlanRepository:
    """Read-only plan catalogue (plans are seeded, never soft-deleted)."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def get(self, plan_id: str) -> BillingPlan | None:
        async with self._db.session() as session:
            row = await session.get(BillingPlanRow, plan_id)
            return _to_plan(row) if row is not None else None

    async def find_by_tier(self, tier: str) -> BillingPlan | None:
        key = parse_enum(BillingTier, tier)
        if key is None:
            return None
        async with self._db.session() as session:
            row = await session.scalar(
                select(BillingPlanRow).where(BillingPlanRow.tier == key),
            )
            return _to_plan(row) if row is not None else None


class SqlApiKeyRepository:
    """API keys have no soft delete; revoked keys stay readable by id."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def get(self, key_id: str) -> ApiKey | None:
        async with self._db.session() as session:
            row = await session.get(ApiKeyRow, key_id)
            return _to_api_key(row) if row is not None else None

    async def list_active(self, organization_id: str) -> list[ApiKey]:
        async with self._db.session() as session:
            rows = await session.scalars(
                select(ApiKeyRow)
                .where(
                    ApiKeyRow.organization_id == organization_id,
                    ApiKeyRow.revoked_at.is_(None),
                )
                .order_by(ApiKeyRow.created_at.desc(), ApiKeyRow.id),
            )
            return [_to_api_key(row) for row in rows.all()]

    async def insert(self, fields: dict[str, Any]) -> ApiKey:
        async with self._db.session() as session:
            row = ApiKeyRow(**fields)
            session.add(row)
            await session.commit()
            await session.refresh(row)
            return _to_api_key(row)

    async def update(self, key_id: str, fields: dict[str, Any]) -> None:
        if not fields:
            return
        async with self._db.session() as session:
            await session.execute(
                update(ApiKeyRow).where(ApiKeyRow.id == key_id).values(**fields),
            )
            await session.commit()


# ─── Analytics ──────────────────────────────────────────────────

def _live_tasks_of(organization_id: str) -> list:
    return [
        ProjectRow.organization_id == organization_id,
        ProjectRow.deleted_at.is_(None),
        TaskRow.deleted_at.is_(None),
    ]


class SqlAnalyticsRepository:
    """Aggregate queries over projects, tasks and members of one organization."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def task_counts_by_status(self, organization_id: str) -> dict[str, int]:
        return await self._grouped_task_counts(TaskRow.status, organization_id)

    async def task_counts_by_priority(self, organization_id: str) -> dict[str, int]:
        return await self._grouped_task_counts(TaskRow.priority, organization_id)

    async def recent_tasks(self, organization_id: str, limit: int) -> list[Task]:
        async with self._db.session() as session:
            rows = await session.scalars(
                select(TaskRow)
                .join(ProjectRow, ProjectRow.id == TaskRow.project_id)
                .where(*_live_tasks_of(organization_id))
                .order_by(TaskRow.updated_at.desc(), TaskRow.id)
                .limit(limit),
            )
            return [_to_task(row) for row in rows.all()]

    async def project_activity(self, organization_id: str) -> list[ProjectActivity]:
        task_count = func.count(TaskRow.id)
        async with self._db.session() as session:
            result = await session.execute(
                select(ProjectRow.id, ProjectRow.name, ProjectRow.status, task_count)
                .outerjoin(TaskRow, and_(
                    TaskRow.project_id == ProjectRow.id, TaskRow.deleted_at.is_(None),
                ))
                .where(
                    ProjectRow.organization_id == organization_id,
                    ProjectRow.deleted_at.is_(None),
                )
                .group_by(ProjectRow.id, ProjectRow.name, ProjectRow.status)
                .order_by(task_count.desc(), ProjectRow.name),
            )
            return [
                ProjectActivity(id=pid, name=name, status=status, task_count=count)
                for pid, name, status, count in result.all()
            ]

    async def member_activity(self, organization_id: str) -> list[MemberActivity]:
        # assigned tasks are counted only under this organization's live projects
        assigned = (
            select(TaskRow.id, TaskRow.assignee_id)
            .join(ProjectRow, ProjectRow.id == TaskRow.project_id)
            .where(*_live_tasks_of(organization_id))
            .subquery()
        )
        task_count = func.count(assigned.c.id)
        async with self._db.session() as session:
            result = await session.execute(
                select(
                    MemberRow.id, MemberRow.name, MemberRow.email, MemberRow.role,
                    task_count,
                )
                .outerjoin(assigned, assigned.c.assignee_id == MemberRow.id)
                .where(
                    MemberRow.organization_id == organization_id,
                    MemberRow.deleted_at.is_(None),
                )
                .group_by(MemberRow.id, MemberRow.name, MemberRow.email, MemberRow.role)
                .order_by(task_count.desc(), MemberRow.email),
            )
            return [
                MemberActivity(
                    id=mid, name=name, email=email, role=role, task_count=count,
                )
                for mid, name, email, role, count in result.all()
            ]

    async def _grouped_task_counts(self, column, organization_id: str) -> dict[str, int]:
        async with self._db.session() as session:
            result = await session.execute(
                select(column, func.count(TaskRow.id))
                .join(ProjectRow, ProjectRow.id == TaskRow.project_id)
                .where(*_live_tasks_of(organization_id))
                .group_by(column),
            )
            return {key.value: count for key, count in result.all()}
