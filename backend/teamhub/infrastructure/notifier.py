"""Logging Notifier — records domain events as structured log lines.

Invariants:
    - Every method returns without IO beyond logging; delivery channels plug in
      by implementing the Notifier protocol
"""

import logging

logger = logging.getLogger(__name__)


class LoggingNotifier:
    """Notifier that writes one INFO line per event."""

    async def member_invited(self, email: str, organization_name: str) -> None:
        logger.info(
            f"Member invited: {email} to {organization_name}",
            extra={"event": "member_invited"},
        )

    async def member_removed(self, email: str, organization_name: str) -> None:
        logger.info(
            f"Member removed: {email} from {organization_name}",
            extra={"event": "member_removed"},
        )

    async def task_assigned(
        self, assignee_id: str, task_title: str, project_name: str,
    ) -> None:
        logger.info(
            f"Task assigned: {task_title} to {assignee_id} in {project_name}",
            extra={"event": "task_assigned", "member_id": assignee_id},
        )

    async def task_status_changed(
        self, task_title: str, old_status: str, new_status: str,
    ) -> None:
        logger.info(
            f"Task status changed: {task_title} {old_status} -> {new_status}",
            extra={"event": "task_status_changed"},
        )
