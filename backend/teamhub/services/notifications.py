"""Notification Dispatch — fire-and-forget delivery of domain events.

Invariants:
    - fire() never raises and never blocks the calling operation
    - A failing or slow Notifier cannot change the outcome of the operation that emitted the event
    - Pending deliveries are held in _pending until done (no GC of running tasks)

Design Decisions:
    - asyncio.create_task over FastAPI BackgroundTasks: services run outside the request
      object and must stay transport-agnostic
    - drain() exists for shutdown and tests only; request paths never call it
"""

import asyncio
import logging
from collections.abc import Coroutine
from functools import partial
from typing import Any

from teamhub.core.repository_protocols import Notifier

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Schedules Notifier calls as detached tasks and logs their failures."""

    def __init__(self, notifier: Notifier):
        self.notifier = notifier
        self._pending: set[asyncio.Task] = set()

    def fire(self, event: str, delivery: Coroutine[Any, Any, None]) -> None:
        try:
            task = asyncio.get_running_loop().create_task(delivery)
        except RuntimeError:
            delivery.close()
            logger.warning(
                f"Notification {event} dropped: no running event loop",
                extra={"event": event},
            )
            return
        self._pending.add(task)
        task.add_done_callback(partial(self._on_done, event))

    def _on_done(self, event: str, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning(
                f"Notification {event} failed: {exc}",
                extra={"event": event},
            )

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for every in-flight delivery to settle."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
