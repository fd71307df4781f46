"""Domain Entities — plain records exchanged between services and the Store.

Invariants:
    - Records carry the tenant key (organization_id) or a path to it (Task -> Project)
    - deleted_at is None for every record a repository returns (soft-deleted rows are invisible)
    - Project.member_ids is ordered and seeded with the creator
    - Member.organization_id never changes after insert

Design Decisions:
    - Dataclasses over ORM objects: services stay free of session/lazy-load concerns,
      and fake repositories in tests build the same types
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from teamhub.core.domain_types import (
    BillingTier, MemberId, OrganizationId, PlanId, ProjectId, ProjectStatus,
    Role, TaskId, TaskPriority, TaskStatus, UserId,
)


@dataclass
class Organization:
    id: OrganizationId
    name: str
    slug: str
    billing_plan_id: PlanId
    settings: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class Member:
    id: MemberId
    organization_id: OrganizationId
    email: str
    name: str
    role: Role
    invited_at: datetime | None = None
    joined_at: datetime | None = None
    created_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass
class Project:
    id: ProjectId
    organization_id: OrganizationId
    name: str
    description: str
    status: ProjectStatus
    member_ids: list[str] = field(default_factory=list)
    created_by: UserId | None = None
    archived_by: UserId | None = None
    archived_at: datetime | None = None
    restored_by: UserId | None = None
    restored_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass
class Task:
    id: TaskId
    project_id: ProjectId
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    assignee_id: str | None = None
    due_date: date | None = None
    tags: list[str] = field(default_factory=list)
    created_by: UserId | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass
class BillingPlan:
    id: PlanId
    name: str
    tier: BillingTier
    max_members: int
    max_projects: int
    price_per_month: float
    features: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class TaskQuery:
    """Task listing scope + filters. Translated by the Store into one query.

    project_ids scopes by owning project; None means "no project scope", an
    empty tuple matches nothing. due_from/due_before form a half-open window.
    """
    project_ids: tuple[str, ...] | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    title_contains: str | None = None
    due_from: date | None = None
    due_before: date | None = None


@dataclass
class ApiKey:
    """Stored API key. Only the SHA-256 hash of the secret is kept."""
    id: str
    organization_id: OrganizationId
    name: str
    hashed_key: str
    prefix: str
    created_by: UserId | None = None
    created_at: datetime | None = None
    last_used_at: datetime | None = None
    revoked_at: datetime | None = None


# ─── Analytics read models ──────────────────────────────────────

@dataclass(frozen=True)
class ProjectActivity:
    id: ProjectId
    name: str
    status: ProjectStatus
    task_count: int


@dataclass(frozen=True)
class MemberActivity:
    id: MemberId
    name: str
    email: str
    role: Role
    task_count: int
