"""Boundary Protocols — contracts between the services and the Store / Notifier.

Invariants:
    - Services NEVER import the SQL implementation — dependency arrows point inward only
    - Every read excludes soft-deleted rows, point lookups included
    - Each call is its own unit of work: safe to run from concurrent coroutines
    - No method enforces tenant isolation; that is the services' job

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - insert/update take plain field dicts: partial updates carry only the keys being set
    - Async in Protocol: boundary methods are async because implementations do IO
"""

from typing import Any, Protocol

from teamhub.core.domain_types import ProjectStatus
from teamhub.core.entities import (
    ApiKey, BillingPlan, Member, MemberActivity, Organization, Project,
    ProjectActivity, Task, TaskQuery,
)


class OrganizationRepository(Protocol):
    """Contract for organization persistence — implemented by shell."""
    async def get(self, organization_id: str) -> Organization | None: ...
    async def find_by_slug(self, slug: str) -> Organization | None: ...
    async def insert(self, fields: dict[str, Any]) -> Organization: ...
    async def update(self, organization_id: str, fields: dict[str, Any]) -> None: ...


class MemberRepository(Protocol):
    """Contract for member persistence — implemented by shell."""
    async def get(self, member_id: str) -> Member | None: ...
    async def find_by_email(
        self, email: str, organization_id: str,
    ) -> Member | None: ...
    async def list_by_organization(
        self, organization_id: str, skip: int, limit: int,
    ) -> list[Member]: ...
    async def count_by_organization(self, organization_id: str) -> int: ...
    async def insert(self, fields: dict[str, Any]) -> Member: ...
    async def update(self, member_id: str, fields: dict[str, Any]) -> None: ...
    async def soft_delete(self, member_id: str) -> None: ...


class ProjectRepository(Protocol):
    """Contract for project persistence — implemented by shell."""
    async def get(self, project_id: str) -> Project | None: ...
    async def list_by_organization(
        self, organization_id: str, skip: int, limit: int,
    ) -> list[Project]: ...
    async def count_by_organization(self, organization_id: str) -> int: ...
    async def list_ids_by_organization(self, organization_id: str) -> list[str]: ...
    async def list_by_status(
        self, organization_id: str, status: ProjectStatus, skip: int, limit: int,
    ) -> list[Project]: ...
    async def count_by_status(
        self, organization_id: str, status: ProjectStatus,
    ) -> int: ...
    async def insert(self, fields: dict[str, Any]) -> Project: ...
    async def update(self, project_id: str, fields: dict[str, Any]) -> None: ...
    async def soft_delete(self, project_id: str) -> None: ...


class TaskRepository(Protocol):
    """Contract for task persistence — implemented by shell."""
    async def get(self, task_id: str) -> Task | None: ...
    async def list(
        self, query: TaskQuery, skip: int, limit: int,
    ) -> list[Task]: ...
    async def count(self, query: TaskQuery) -> int: ...
    async def insert(self, fields: dict[str, Any]) -> Task: ...
    async def update(self, task_id: str, fields: dict[str, Any]) -> None: ...
    async def soft_delete(self, task_id: str) -> None: ...


class BillingPlanRepository(Protocol):
    """Contract for billing plan lookup — implemented by shell."""
    async def get(self, plan_id: str) -> BillingPlan | None: ...
    async def find_by_tier(self, tier: str) -> BillingPlan | None: ...


class ApiKeyRepository(Protocol):
    """Contract for API key persistence. Keys are revoked, never deleted."""
    async def get(self, key_id: str) -> ApiKey | None: ...
    async def list_active(self, organization_id: str) -> list[ApiKey]: ...
    async def insert(self, fields: dict[str, Any]) -> ApiKey: ...
    async def update(self, key_id: str, fields: dict[str, Any]) -> None: ...


class AnalyticsRepository(Protocol):
    """Read-only aggregates over one organization's live projects, tasks and members.

    Tasks count only when both the task and its project are live.
    """
    async def task_counts_by_status(self, organization_id: str) -> dict[str, int]: ...
    async def task_counts_by_priority(self, organization_id: str) -> dict[str, int]: ...
    async def recent_tasks(self, organization_id: str, limit: int) -> list[Task]: ...
    async def project_activity(self, organization_id: str) -> list[ProjectActivity]: ...
    async def member_activity(self, organization_id: str) -> list[MemberActivity]: ...


class Notifier(Protocol):
    """Outbound event delivery. Best-effort; callers never await the outcome."""
    async def member_invited(self, email: str, organization_name: str) -> None: ...
    async def member_removed(self, email: str, organization_name: str) -> None: ...
    async def task_assigned(
        self, assignee_id: str, task_title: str, project_name: str,
    ) -> None: ...
    async def task_status_changed(
        self, task_title: str, old_status: str, new_status: str,
    ) -> None: ...
