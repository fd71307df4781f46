"""Task Routes — list/filter, CRUD and status changes.

Invariants:
    - /tasks/filter is declared before /tasks/{task_id}
    - Listing without projectId spans every project of the caller's organization
"""

from fastapi import APIRouter, Depends, Query, Response, status

from teamhub.api.deps import get_page_request, get_services, require_tenant
from teamhub.core.identity import RequestIdentity
from teamhub.core.pagination import PageRequest, pagination_meta
from teamhub.schemas.task import (
    TaskCreate, TaskPage, TaskResponse, TaskStatusUpdate, TaskUpdate,
)
from teamhub.services.container import ServiceContainer

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


@router.get("", response_model=TaskPage)
async def list_tasks(
    project_id: str | None = Query(None, alias="projectId"),
    task_status: str | None = Query(None, alias="status"),
    priority: str | None = Query(None),
    search: str | None = Query(None),
    page: PageRequest = Depends(get_page_request),
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    org_id = identity.organization_id
    filters = {"status": task_status, "priority": priority, "search": search}
    tasks = await services.tasks.list_tasks(
        project_id, org_id, filters, page.skip, page.page_size,
    )
    total = await services.tasks.count_tasks(project_id, org_id, filters)
    return {
        "data": [TaskResponse.model_validate(t) for t in tasks],
        "pagination": pagination_meta(page, total),
    }


@router.get("/filter", response_model=TaskPage)
async def filter_tasks_by_due_date(
    project_id: str = Query(..., alias="projectId"),
    start_date: str = Query(..., alias="startDate"),
    end_date: str = Query(..., alias="endDate"),
    page: PageRequest = Depends(get_page_request),
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    org_id = identity.organization_id
    tasks = await services.tasks.filter_by_date_range(
        project_id, start_date, end_date, org_id, page.skip, page.page_size,
    )
    total = await services.tasks.count_by_date_range(
        project_id, start_date, end_date, org_id,
    )
    return {
        "data": [TaskResponse.model_validate(t) for t in tasks],
        "pagination": pagination_meta(page, total),
    }


@router.post(
    "", response_model=TaskResponse, status_code=status.HTTP_201_CREATED,
)
async def create_task(
    body: TaskCreate,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    task = await services.tasks.create(
        body.model_dump(), identity.user_id, identity.organization_id,
    )
    return TaskResponse.model_validate(task)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    task = await services.tasks.get(task_id, identity.organization_id)
    return TaskResponse.model_validate(task)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    body: TaskUpdate,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    task = await services.tasks.update(
        task_id, body.model_dump(exclude_unset=True), identity.organization_id,
    )
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: str,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    await services.tasks.delete(task_id, identity.organization_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{task_id}/status", response_model=TaskResponse)
async def update_task_status(
    task_id: str,
    body: TaskStatusUpdate,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    task = await services.tasks.update_status(
        task_id, body.status, identity.organization_id,
    )
    return TaskResponse.model_validate(task)
