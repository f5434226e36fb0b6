"""Notification sink implementations."""

import asyncio
import logging
from collections import OrderedDict
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ssh_probe.models import NotificationKind, ProbeNotification

if TYPE_CHECKING:
    from fastmcp import Context

    from ssh_probe.protocols import NotificationSink

logger = logging.getLogger(__name__)


class QueueSink:
    """Puts notifications on an asyncio.Queue for a consumer to await."""

    def __init__(self, queue: asyncio.Queue[ProbeNotification] | None = None):
        self.queue: asyncio.Queue[ProbeNotification] = queue or asyncio.Queue()

    async def emit(self, notification: ProbeNotification) -> None:
        await self.queue.put(notification)


class RunHistory:
    """Notifications recorded per run, bounded to the most recent runs.

    Only finished runs are evicted, so a run still in flight keeps its
    Started entry until its terminal notification lands. While more than
    max_runs runs are in flight the history temporarily holds them all.

    Only touched from the event loop thread, so no locking.
    """

    def __init__(self, max_runs: int = 100):
        """Initialize history.

        Args:
            max_runs: Finished runs kept before the oldest is evicted
        """
        if max_runs <= 0:
            raise ValueError(f"max_runs must be > 0, got {max_runs}")
        self.max_runs = max_runs
        self._runs: OrderedDict[str, list[ProbeNotification]] = OrderedDict()

    async def emit(self, notification: ProbeNotification) -> None:
        """Record a notification under its run id.

        A terminal notification for a run never seen starting is dropped.
        """
        events = self._runs.get(notification.run_id)
        if events is None:
            if notification.kind.is_terminal:
                logger.debug(
                    "Dropped %s for unknown run=%s",
                    notification.topic,
                    notification.run_id,
                )
                return
            events = self._runs[notification.run_id] = []
        events.append(notification)
        self._evict()

    def _evict(self) -> None:
        excess = len(self._runs) - self.max_runs
        if excess <= 0:
            return
        finished = [
            run_id for run_id, events in self._runs.items() if events[-1].kind.is_terminal
        ]
        for run_id in finished[:excess]:
            del self._runs[run_id]
            logger.debug("Evicted run=%s from history", run_id)

    def get(self, run_id: str) -> list[ProbeNotification] | None:
        """Notifications for a run in emission order, or None if unknown."""
        events = self._runs.get(run_id)
        return list(events) if events is not None else None

    def latest(self, run_id: str) -> ProbeNotification | None:
        events = self._runs.get(run_id)
        return events[-1] if events else None

    def runs(self) -> list[str]:
        """Known run ids, oldest first."""
        return list(self._runs)

    def __len__(self) -> int:
        return len(self._runs)


class ContextSink:
    """Forwards notifications to an MCP client as log messages.

    Bound to the request that created it; once that request has finished
    the context can no longer send and emit() raises.
    """

    def __init__(self, ctx: "Context", logger_name: str = "ssh_probe"):
        self.ctx = ctx
        self.logger_name = logger_name

    async def emit(self, notification: ProbeNotification) -> None:
        text = f"[{notification.run_id}] {notification.topic}: {notification.target}"
        if notification.message:
            text = f"{text} {notification.message}"

        if notification.kind is NotificationKind.FAILED:
            await self.ctx.error(text, logger_name=self.logger_name)
        else:
            await self.ctx.info(text, logger_name=self.logger_name)


class FanoutSink:
    """Delivers each notification to several sinks independently.

    A sink that raises is logged and skipped; the others still receive
    the notification.
    """

    def __init__(self, sinks: Iterable["NotificationSink"]):
        self.sinks = list(sinks)

    async def emit(self, notification: ProbeNotification) -> None:
        for sink in self.sinks:
            try:
                await sink.emit(notification)
            except Exception as e:
                logger.debug(
                    "Sink %s dropped %s for run=%s: %s",
                    type(sink).__name__,
                    notification.topic,
                    notification.run_id,
                    e,
                )
