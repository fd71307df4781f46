"""Project Schemas — CRUD payloads, project view, bulk archive request."""

from datetime import datetime

from pydantic import Field

from teamhub.core.domain_types import ProjectStatus
from teamhub.schemas.base import CamelModel, PaginationMeta


class ProjectCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = Field("", max_length=5000)


class ProjectUpdate(CamelModel):
    name: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=5000)


class ProjectResponse(CamelModel):
    id: str
    organization_id: str
    name: str
    description: str
    status: ProjectStatus
    member_ids: list[str]
    created_by: str | None = None
    archived_by: str | None = None
    archived_at: datetime | None = None
    restored_by: str | None = None
    restored_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProjectPage(CamelModel):
    data: list[ProjectResponse]
    pagination: PaginationMeta


class BulkProjectRequest(CamelModel):
    """Ids are checked by the route (count bound, blank entries) for precise messages."""
    project_ids: list[str | None] | None = None


class BulkItemResponse(CamelModel):
    project_id: str
    status: str
    reason: str | None = None


class BulkOperationResponse(CamelModel):
    results: list[BulkItemResponse]
    summary: dict[str, int]


class ArchiveSummaryResponse(CamelModel):
    archived_projects: int
    active_projects: int
    total_projects: int
