"""Analytics Service — tenant dashboards built from grouped counts.

Invariants:
    - Every figure is scoped to one organization; cross-tenant rows never contribute
    - Status and priority breakdowns list every enum value, zero when absent
    - total equals the sum of the status breakdown
    - Recent activity is ordered by last update, newest first, capped at recent_limit

Design Decisions:
    - Aggregation lives in the Store (AnalyticsRepository) so SQL does the grouping;
      this layer only fills gaps and assembles the response shape
    - Figures are read with independent queries, so a dashboard taken during writes
      may be slightly inconsistent, acceptable for a reporting view
"""

import logging
from dataclasses import dataclass, field

from teamhub.core.domain_types import TaskPriority, TaskStatus
from teamhub.core.entities import MemberActivity, ProjectActivity, Task
from teamhub.core.repository_protocols import AnalyticsRepository

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_LIMIT = 10


@dataclass(frozen=True)
class TaskBreakdown:
    by_status: dict[str, int]
    by_priority: dict[str, int]
    total: int


@dataclass(frozen=True)
class Dashboard:
    tasks: TaskBreakdown
    recent_activity: list[Task] = field(default_factory=list)
    project_activity: list[ProjectActivity] = field(default_factory=list)


def _fill(counts: dict[str, int], enum_cls) -> dict[str, int]:
    return {member.value: counts.get(member.value, 0) for member in enum_cls}


class AnalyticsService:

    def __init__(
        self, analytics: AnalyticsRepository, recent_limit: int = RECENT_ACTIVITY_LIMIT,
    ):
        self._analytics = analytics
        self._recent_limit = recent_limit

    async def get_task_analytics(self, organization_id: str) -> TaskBreakdown:
        by_status = _fill(
            await self._analytics.task_counts_by_status(organization_id), TaskStatus,
        )
        by_priority = _fill(
            await self._analytics.task_counts_by_priority(organization_id), TaskPriority,
        )
        return TaskBreakdown(
            by_status=by_status,
            by_priority=by_priority,
            total=sum(by_status.values()),
        )

    async def get_dashboard(self, organization_id: str) -> Dashboard:
        tasks = await self.get_task_analytics(organization_id)
        recent = await self._analytics.recent_tasks(organization_id, self._recent_limit)
        projects = await self._analytics.project_activity(organization_id)
        logger.debug(
            f"Dashboard built: {tasks.total} tasks, {len(projects)} projects",
            extra={"organization_id": organization_id},
        )
        return Dashboard(tasks=tasks, recent_activity=recent, project_activity=projects)

    async def get_member_analytics(self, organization_id: str) -> list[MemberActivity]:
        return await self._analytics.member_activity(organization_id)
