"""Archive Engine — bulk archive/restore with per-item isolation, archive dashboards.

Invariants:
    - Every id is processed independently and concurrently; results keep input order
    - The batch settles only after every item has settled (gather, no short-circuit)
    - One item's failure is caught locally and reported as "failed" with its message;
      it never aborts the batch
    - Item already in the target state -> "skipped" (bulk is tolerant, single-item
      transitions in ProjectService are strict)
    - Summary counts only the success status; "skipped" folds into "failed"
    - Successful items are stamped with actor + timestamp audit fields
    - is_owned_by_org() never raises for a missing project: absent and foreign both -> False

Design Decisions:
    - Engine tolerates any list length; the 1..max_bulk_size bound is enforced by Transport
    - archive summary issues two independent counts; totals can skew under concurrent
      mutation, acceptable for a dashboard figure
"""

import asyncio
import logging
from datetime import datetime, timezone

from teamhub.core.bulk_results import (
    ACCESS_DENIED_REASON, ALREADY_ARCHIVED_REASON, NOT_ARCHIVED_REASON,
    NOT_FOUND_REASON, BulkItemResult, build_bulk_response,
)
from teamhub.core.domain_types import BulkItemStatus, ProjectStatus
from teamhub.core.entities import Project
from teamhub.core.repository_protocols import ProjectRepository

logger = logging.getLogger(__name__)


class ArchiveEngine:
    """Bulk lifecycle transitions over a tenant's projects."""

    def __init__(self, projects: ProjectRepository):
        self._projects = projects

    # ─── Bulk transitions ─────────────────────────────────────────

    async def bulk_archive(
        self, project_ids: list[str], organization_id: str, user_id: str,
    ) -> dict:
        results = await asyncio.gather(*(
            self._archive_one(pid, organization_id, user_id) for pid in project_ids
        ))
        response = build_bulk_response(list(results), BulkItemStatus.ARCHIVED)
        summary = response["summary"]
        logger.info(
            f"Bulk archive: {summary['archived']}/{summary['total']} archived",
            extra={"organization_id": organization_id, "user_id": user_id},
        )
        return response

    async def bulk_restore(
        self, project_ids: list[str], organization_id: str, user_id: str,
    ) -> dict:
        results = await asyncio.gather(*(
            self._restore_one(pid, organization_id, user_id) for pid in project_ids
        ))
        response = build_bulk_response(list(results), BulkItemStatus.RESTORED)
        summary = response["summary"]
        logger.info(
            f"Bulk restore: {summary['restored']}/{summary['total']} restored",
            extra={"organization_id": organization_id, "user_id": user_id},
        )
        return response

    async def _archive_one(
        self, project_id: str, organization_id: str, user_id: str,
    ) -> BulkItemResult:
        try:
            project = await self._projects.get(project_id)
            rejected = _reject_foreign(project_id, project, organization_id)
            if rejected is not None:
                return rejected
            if project.status is ProjectStatus.ARCHIVED:
                return BulkItemResult(
                    project_id, BulkItemStatus.SKIPPED, ALREADY_ARCHIVED_REASON,
                )
            await self._projects.update(project_id, {
                "status": ProjectStatus.ARCHIVED,
                "archived_by": user_id,
                "archived_at": datetime.now(timezone.utc),
            })
            return BulkItemResult(project_id, BulkItemStatus.ARCHIVED)
        except Exception as exc:
            logger.error(
                f"Bulk archive item failed: {exc}",
                extra={"organization_id": organization_id, "project_id": project_id},
            )
            return BulkItemResult(project_id, BulkItemStatus.FAILED, str(exc))

    async def _restore_one(
        self, project_id: str, organization_id: str, user_id: str,
    ) -> BulkItemResult:
        try:
            project = await self._projects.get(project_id)
            rejected = _reject_foreign(project_id, project, organization_id)
            if rejected is not None:
                return rejected
            if project.status is not ProjectStatus.ARCHIVED:
                return BulkItemResult(
                    project_id, BulkItemStatus.SKIPPED, NOT_ARCHIVED_REASON,
                )
            await self._projects.update(project_id, {
                "status": ProjectStatus.ACTIVE,
                "restored_by": user_id,
                "restored_at": datetime.now(timezone.utc),
            })
            return BulkItemResult(project_id, BulkItemStatus.RESTORED)
        except Exception as exc:
            logger.error(
                f"Bulk restore item failed: {exc}",
                extra={"organization_id": organization_id, "project_id": project_id},
            )
            return BulkItemResult(project_id, BulkItemStatus.FAILED, str(exc))

    # ─── Reads ────────────────────────────────────────────────────

    async def list_archived(
        self, organization_id: str, skip: int, limit: int,
    ) -> list[Project]:
        return await self._projects.list_by_status(
            organization_id, ProjectStatus.ARCHIVED, skip, limit,
        )

    async def count_archived(self, organization_id: str) -> int:
        return await self._projects.count_by_status(
            organization_id, ProjectStatus.ARCHIVED,
        )

    async def get_archive_summary(self, organization_id: str) -> dict:
        archived, active = await asyncio.gather(
            self._projects.count_by_status(organization_id, ProjectStatus.ARCHIVED),
            self._projects.count_by_status(organization_id, ProjectStatus.ACTIVE),
        )
        return {
            "archivedProjects": archived,
            "activeProjects": active,
            "totalProjects": archived + active,
        }

    async def is_owned_by_org(self, project_id: str, organization_id: str) -> bool:
        project = await self._projects.get(project_id)
        return project is not None and project.organization_id == organization_id


def _reject_foreign(
    project_id: str, project: Project | None, organization_id: str,
) -> BulkItemResult | None:
    if project is None:
        return BulkItemResult(project_id, BulkItemStatus.FAILED, NOT_FOUND_REASON)
    if project.organization_id != organization_id:
        return BulkItemResult(project_id, BulkItemStatus.FAILED, ACCESS_DENIED_REASON)
    return None
