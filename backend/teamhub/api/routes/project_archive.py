"""Project Archive Routes — archived listing, bulk archive/restore, archive summary.

Invariants:
    - Bulk requests carry 1..max_bulk_size ids, none blank; violations fail before
      any project is touched
    - bulk-archive pre-checks ownership of every id concurrently and rejects the
      whole request Forbidden on the first foreign or missing id (input order);
      bulk-restore has no pre-check and reports per item instead
"""

import asyncio
import logging

from fastapi import APIRouter, Depends

from teamhub.api.deps import get_page_request, get_services, require_tenant
from teamhub.config import Settings, get_settings
from teamhub.core.errors import BadRequestError, ForbiddenError, ValidationError
from teamhub.core.identity import RequestIdentity
from teamhub.core.pagination import PageRequest, pagination_meta
from teamhub.schemas.project import (
    ArchiveSummaryResponse, BulkOperationResponse, BulkProjectRequest,
    ProjectPage, ProjectResponse,
)
from teamhub.services.container import ServiceContainer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/projects", tags=["project-archive"])


def validate_bulk_ids(
    raw_ids: list[str | None] | None, max_size: int, verb: str,
) -> list[str]:
    if not raw_ids:
        raise BadRequestError("At least one project ID is required")
    if len(raw_ids) > max_size:
        raise BadRequestError(f"Cannot {verb} more than {max_size} projects at once")
    for index, project_id in enumerate(raw_ids):
        if project_id is None or not project_id.strip():
            raise ValidationError(
                f"Invalid project ID at index {index}", field="projectIds",
            )
    return list(raw_ids)


@router.get("/archived", response_model=ProjectPage)
async def list_archived_projects(
    page: PageRequest = Depends(get_page_request),
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    org_id = identity.organization_id
    projects = await services.archive.list_archived(org_id, page.skip, page.page_size)
    total = await services.archive.count_archived(org_id)
    return {
        "data": [ProjectResponse.model_validate(p) for p in projects],
        "pagination": pagination_meta(page, total),
    }


@router.post("/bulk-archive", response_model=BulkOperationResponse)
async def bulk_archive_projects(
    body: BulkProjectRequest,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
    settings: Settings = Depends(get_settings),
):
    org_id = identity.organization_id
    ids = validate_bulk_ids(body.project_ids, settings.max_bulk_size, "archive")

    owned = await asyncio.gather(*(
        services.archive.is_owned_by_org(pid, org_id) for pid in ids
    ))
    for project_id, is_owned in zip(ids, owned):
        if not is_owned:
            logger.warning(
                "Bulk archive rejected: foreign project",
                extra={"organization_id": org_id, "project_id": project_id},
            )
            raise ForbiddenError(
                f"Project {project_id} does not belong to this organization",
            )

    return await services.archive.bulk_archive(ids, org_id, identity.user_id)


@router.post("/bulk-restore", response_model=BulkOperationResponse)
async def bulk_restore_projects(
    body: BulkProjectRequest,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
    settings: Settings = Depends(get_settings),
):
    ids = validate_bulk_ids(body.project_ids, settings.max_bulk_size, "restore")
    return await services.archive.bulk_restore(
        ids, identity.organization_id, identity.user_id,
    )


@router.get("/archive-summary", response_model=ArchiveSummaryResponse)
async def get_archive_summary(
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    return await services.archive.get_archive_summary(identity.organization_id)
