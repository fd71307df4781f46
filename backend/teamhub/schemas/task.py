"""Task Schemas.

Invariants:
    - priority/status/dueDate arrive as strings; TaskService parses them
    - Responses render dueDate as an ISO date (YYYY-MM-DD)
"""

from datetime import date, datetime

from pydantic import Field

from teamhub.core.domain_types import TaskPriority, TaskStatus
from teamhub.schemas.base import CamelModel, PaginationMeta


class TaskCreate(CamelModel):
    project_id: str = Field(min_length=1)
    title: str = Field(min_length=1, max_length=500)
    description: str = Field("", max_length=10_000)
    assignee_id: str | None = None
    priority: str | None = None
    due_date: str | None = None
    tags: list[str] = Field(default_factory=list)


class TaskUpdate(CamelModel):
    title: str | None = Field(None, max_length=500)
    description: str | None = Field(None, max_length=10_000)
    assignee_id: str | None = None
    priority: str | None = None
    due_date: str | None = None
    tags: list[str] | None = None


class TaskStatusUpdate(CamelModel):
    status: str


class TaskResponse(CamelModel):
    id: str
    project_id: str
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    assignee_id: str | None = None
    due_date: date | None = None
    tags: list[str]
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TaskPage(CamelModel):
    data: list[TaskResponse]
    pagination: PaginationMeta
