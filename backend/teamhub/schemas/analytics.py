"""Analytics Schemas — dashboard, task breakdown, member activity."""

from datetime import datetime

from teamhub.core.domain_types import ProjectStatus, Role, TaskStatus
from teamhub.schemas.base import CamelModel


class TaskBreakdownResponse(CamelModel):
    by_status: dict[str, int]
    by_priority: dict[str, int]
    total: int


class TaskActivityResponse(CamelModel):
    id: str
    project_id: str
    title: str
    status: TaskStatus
    created_by: str | None = None
    updated_at: datetime | None = None


class ProjectActivityResponse(CamelModel):
    id: str
    name: str
    status: ProjectStatus
    task_count: int


class DashboardResponse(CamelModel):
    tasks: TaskBreakdownResponse
    recent_activity: list[TaskActivityResponse]
    project_activity: list[ProjectActivityResponse]


class MemberActivityResponse(CamelModel):
    id: str
    name: str
    email: str
    role: Role
    task_count: int


class MemberAnalyticsResponse(CamelModel):
    data: list[MemberActivityResponse]
