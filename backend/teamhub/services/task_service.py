"""Task Service — project-scoped task CRUD, filtering and status changes.

Invariants:
    - Every task read re-validates tenant ownership through ProjectService.get();
      NotFound/Forbidden from the project check propagate unchanged
    - create(): assignee (when given) must be in the project's member_ids, else BadRequest;
      status starts TODO, priority defaults to MEDIUM
    - update(): allow-listed fields only; the assignee is NOT re-validated on update
    - update_status(): any recognized status may follow any other (no transition graph)
    - Date-range filter is half-open: start <= due_date < end, soft-deleted tasks excluded
"""

import logging
from datetime import date, datetime
from typing import Any

from teamhub.core.domain_types import TaskPriority, TaskStatus, parse_enum
from teamhub.core.entities import Task, TaskQuery
from teamhub.core.errors import BadRequestError, NotFoundError, ValidationError
from teamhub.core.repository_protocols import TaskRepository
from teamhub.services.notifications import NotificationDispatcher
from teamhub.services.project_service import ProjectService

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "title", "description", "assignee_id", "priority", "due_date", "tags",
)


def parse_due_date(value: date | str | None, field: str = "due_date") -> date | None:
    """Accept a date, an ISO date string, or an ISO datetime string (date part kept)."""
    if value is None or isinstance(value, date):
        return value.date() if isinstance(value, datetime) else value
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        raise ValidationError(f"Invalid date: {value}", field=field)


def _parse_priority(raw: str | None) -> TaskPriority:
    priority = parse_enum(TaskPriority, raw)
    if priority is None:
        raise ValidationError(f"Invalid task priority: {raw}", field="priority")
    return priority


def _parse_status(raw: str | None) -> TaskStatus:
    status = parse_enum(TaskStatus, raw)
    if status is None:
        raise ValidationError(f"Invalid task status: {raw}", field="status")
    return status


def _filters_to_query(filters: dict[str, Any] | None, project_ids: list[str]) -> TaskQuery:
    filters = filters or {}
    status = filters.get("status")
    priority = filters.get("priority")
    return TaskQuery(
        project_ids=tuple(project_ids),
        status=_parse_status(status) if status else None,
        priority=_parse_priority(priority) if priority else None,
        title_contains=filters.get("search") or None,
    )


class TaskService:
    """Tasks, always reached through their owning project's tenant check."""

    def __init__(
        self,
        tasks: TaskRepository,
        projects: ProjectService,
        notifications: NotificationDispatcher,
    ):
        self._tasks = tasks
        self._projects = projects
        self._notifications = notifications

    async def create(
        self, payload: dict[str, Any], user_id: str, organization_id: str,
    ) -> Task:
        project_id = payload.get("project_id")
        title = (payload.get("title") or "").strip()
        if not project_id:
            raise BadRequestError("projectId is required")
        if not title:
            raise BadRequestError("title is required")

        project = await self._projects.get(project_id, organization_id)

        assignee_id = payload.get("assignee_id")
        if assignee_id is not None and assignee_id not in project.member_ids:
            raise BadRequestError("Assignee is not a member of this project")

        task = await self._tasks.insert({
            "title": title,
            "description": payload.get("description") or "",
            "project_id": project_id,
            "assignee_id": assignee_id,
            "status": TaskStatus.TODO,
            "priority": _parse_priority(payload.get("priority") or TaskPriority.MEDIUM.value),
            "due_date": parse_due_date(payload.get("due_date")),
            "tags": list(payload.get("tags") or []),
            "created_by": user_id,
        })
        logger.info(
            f"Task created: {task.title}",
            extra={"organization_id": organization_id, "project_id": project_id,
                   "task_id": task.id, "user_id": user_id},
        )
        if assignee_id is not None:
            self._notifications.fire(
                "task_assigned",
                self._notifications.notifier.task_assigned(
                    assignee_id, task.title, project.name,
                ),
            )
        return task

    async def get(self, task_id: str, organization_id: str) -> Task:
        task = await self._tasks.get(task_id)
        if task is None:
            raise NotFoundError("Task not found")
        await self._projects.get(task.project_id, organization_id)
        return task

    async def list_tasks(
        self,
        project_id: str | None,
        organization_id: str,
        filters: dict[str, Any] | None,
        skip: int,
        limit: int,
    ) -> list[Task]:
        query = await self._scoped_query(project_id, organization_id, filters)
        return await self._tasks.list(query, skip, limit)

    async def count_tasks(
        self,
        project_id: str | None,
        organization_id: str,
        filters: dict[str, Any] | None,
    ) -> int:
        query = await self._scoped_query(project_id, organization_id, filters)
        return await self._tasks.count(query)

    async def filter_by_date_range(
        self,
        project_id: str,
        start: date | str,
        end: date | str,
        organization_id: str,
        skip: int,
        limit: int,
    ) -> list[Task]:
        query = await self._date_range_query(project_id, start, end, organization_id)
        return await self._tasks.list(query, skip, limit)

    async def count_by_date_range(
        self,
        project_id: str,
        start: date | str,
        end: date | str,
        organization_id: str,
    ) -> int:
        query = await self._date_range_query(project_id, start, end, organization_id)
        return await self._tasks.count(query)

    async def update(
        self, task_id: str, patch: dict[str, Any], organization_id: str,
    ) -> Task:
        await self.get(task_id, organization_id)
        changes = {k: patch[k] for k in UPDATABLE_FIELDS if k in patch}
        if "title" in changes and not (changes["title"] or "").strip():
            raise BadRequestError("title cannot be empty")
        if "description" in changes:
            changes["description"] = changes["description"] or ""
        if "priority" in changes:
            changes["priority"] = _parse_priority(changes["priority"])
        if "due_date" in changes:
            changes["due_date"] = parse_due_date(changes["due_date"])
        if "tags" in changes:
            changes["tags"] = list(changes["tags"] or [])
        await self._tasks.update(task_id, changes)
        return await self.get(task_id, organization_id)

    async def delete(self, task_id: str, organization_id: str) -> None:
        await self.get(task_id, organization_id)
        logger.info(
            "Soft deleting task",
            extra={"organization_id": organization_id, "task_id": task_id},
        )
        await self._tasks.soft_delete(task_id)

    async def update_status(
        self, task_id: str, new_status: str, organization_id: str,
    ) -> Task:
        existing = await self.get(task_id, organization_id)
        status = _parse_status(new_status)

        await self._tasks.update(task_id, {"status": status})
        logger.info(
            f"Task status changed: {existing.status.value} -> {status.value}",
            extra={"organization_id": organization_id, "task_id": task_id},
        )
        self._notifications.fire(
            "task_status_changed",
            self._notifications.notifier.task_status_changed(
                existing.title, existing.status.value, status.value,
            ),
        )
        return await self.get(task_id, organization_id)

    async def _scoped_query(
        self,
        project_id: str | None,
        organization_id: str,
        filters: dict[str, Any] | None,
    ) -> TaskQuery:
        if project_id:
            await self._projects.get(project_id, organization_id)
            return _filters_to_query(filters, [project_id])
        project_ids = await self._projects.project_ids(organization_id)
        return _filters_to_query(filters, project_ids)

    async def _date_range_query(
        self,
        project_id: str,
        start: date | str,
        end: date | str,
        organization_id: str,
    ) -> TaskQuery:
        due_from = parse_due_date(start, field="startDate")
        due_before = parse_due_date(end, field="endDate")
        if due_from is None or due_before is None:
            raise BadRequestError("startDate and endDate are required")
        await self._projects.get(project_id, organization_id)
        return TaskQuery(
            project_ids=(project_id,),
            due_from=due_from,
            due_before=due_before,
        )
