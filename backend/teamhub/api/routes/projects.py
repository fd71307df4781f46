"""Project Routes — CRUD plus strict single-project archive/unarchive.

Invariants:
    - Registered AFTER project_archive.router so /projects/archived and friends
      are not captured by /projects/{project_id}
"""

from fastapi import APIRouter, Depends, Response, status

from teamhub.api.deps import get_page_request, get_services, require_tenant
from teamhub.core.identity import RequestIdentity
from teamhub.core.pagination import PageRequest, pagination_meta
from teamhub.schemas.project import (
    ProjectCreate, ProjectPage, ProjectResponse, ProjectUpdate,
)
from teamhub.services.container import ServiceContainer

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.get("", response_model=ProjectPage)
async def list_projects(
    page: PageRequest = Depends(get_page_request),
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    org_id = identity.organization_id
    projects = await services.projects.list_projects(org_id, page.skip, page.page_size)
    total = await services.projects.count_projects(org_id)
    return {
        "data": [ProjectResponse.model_validate(p) for p in projects],
        "pagination": pagination_meta(page, total),
    }


@router.post(
    "", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED,
)
async def create_project(
    body: ProjectCreate,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    project = await services.projects.create(
        body.model_dump(), identity.user_id, identity.organization_id,
    )
    return ProjectResponse.model_validate(project)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    project = await services.projects.get(project_id, identity.organization_id)
    return ProjectResponse.model_validate(project)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    body: ProjectUpdate,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    project = await services.projects.update(
        project_id, body.model_dump(exclude_unset=True), identity.organization_id,
    )
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    await services.projects.delete(project_id, identity.organization_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{project_id}/archive", response_model=ProjectResponse)
async def archive_project(
    project_id: str,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    project = await services.projects.archive(project_id, identity.organization_id)
    return ProjectResponse.model_validate(project)


@router.post("/{project_id}/unarchive", response_model=ProjectResponse)
async def unarchive_project(
    project_id: str,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    project = await services.projects.unarchive(project_id, identity.organization_id)
    return ProjectResponse.model_validate(project)
