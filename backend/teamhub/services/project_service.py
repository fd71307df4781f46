"""Project Service — tenant-scoped project CRUD and strict archive transitions.

Invariants:
    - get() is the tenant-isolation boundary: NotFound when absent, Forbidden when the
      project belongs to another organization. TaskService relies on it
    - create() enforces the plan's max_projects ceiling, seeds member_ids with the
      creator and starts in ACTIVE
    - update() touches name/description only; a null description is stored as ""
    - archive() on ARCHIVED and unarchive() on ACTIVE fail BadRequest (single-item
      transitions are strict; the bulk engine reports "skipped" instead)
"""

import logging
from typing import Any

from teamhub.core.domain_types import ProjectStatus
from teamhub.core.entities import Project
from teamhub.core.errors import BadRequestError, ForbiddenError, NotFoundError
from teamhub.core.repository_protocols import ProjectRepository
from teamhub.services.billing_policy import BillingPolicy

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "description")


class ProjectService:
    """Project lifecycle within one tenant."""

    def __init__(self, projects: ProjectRepository, billing: BillingPolicy):
        self._projects = projects
        self._billing = billing

    async def create(
        self, payload: dict[str, Any], user_id: str, organization_id: str,
    ) -> Project:
        name = (payload.get("name") or "").strip()
        if not name:
            raise BadRequestError("Project name is required")

        await self._billing.ensure_project_capacity(organization_id)

        project = await self._projects.insert({
            "name": name,
            "description": payload.get("description") or "",
            "organization_id": organization_id,
            "status": ProjectStatus.ACTIVE,
            "member_ids": [user_id],
            "created_by": user_id,
        })
        logger.info(
            f"Project created: {project.name}",
            extra={"organization_id": organization_id, "project_id": project.id,
                   "user_id": user_id},
        )
        return project

    async def get(self, project_id: str, organization_id: str) -> Project:
        project = await self._projects.get(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        if project.organization_id != organization_id:
            raise ForbiddenError("Access denied to this project")
        return project

    async def list_projects(
        self, organization_id: str, skip: int, limit: int,
    ) -> list[Project]:
        return await self._projects.list_by_organization(organization_id, skip, limit)

    async def count_projects(self, organization_id: str) -> int:
        return await self._projects.count_by_organization(organization_id)

    async def project_ids(self, organization_id: str) -> list[str]:
        return await self._projects.list_ids_by_organization(organization_id)

    async def update(
        self, project_id: str, patch: dict[str, Any], organization_id: str,
    ) -> Project:
        await self.get(project_id, organization_id)
        changes = {k: patch[k] for k in UPDATABLE_FIELDS if k in patch}
        if "name" in changes and not (changes["name"] or "").strip():
            raise BadRequestError("Project name cannot be empty")
        if "description" in changes:
            changes["description"] = changes["description"] or ""
        await self._projects.update(project_id, changes)
        return await self.get(project_id, organization_id)

    async def delete(self, project_id: str, organization_id: str) -> None:
        await self.get(project_id, organization_id)
        logger.info(
            "Soft deleting project",
            extra={"organization_id": organization_id, "project_id": project_id},
        )
        await self._projects.soft_delete(project_id)

    async def archive(self, project_id: str, organization_id: str) -> Project:
        existing = await self.get(project_id, organization_id)
        if existing.status is ProjectStatus.ARCHIVED:
            raise BadRequestError("Project is already archived")
        await self._projects.update(project_id, {"status": ProjectStatus.ARCHIVED})
        logger.info(
            "Project archived",
            extra={"organization_id": organization_id, "project_id": project_id},
        )
        return await self.get(project_id, organization_id)

    async def unarchive(self, project_id: str, organization_id: str) -> Project:
        existing = await self.get(project_id, organization_id)
        if existing.status is not ProjectStatus.ARCHIVED:
            raise BadRequestError("Project is not archived")
        await self._projects.update(project_id, {"status": ProjectStatus.ACTIVE})
        logger.info(
            "Project unarchived",
            extra={"organization_id": organization_id, "project_id": project_id},
        )
        return await self.get(project_id, organization_id)
