"""Background execution of reachability checks with lifecycle notifications."""

import asyncio
import logging
import uuid
from typing import TYPE_CHECKING

from ssh_probe.models import ProbeNotification

if TYPE_CHECKING:
    from ssh_probe.models import ProbeResult
    from ssh_probe.protocols import NotificationSink
    from ssh_probe.services.probe import Probe

logger = logging.getLogger(__name__)


def new_run_id() -> str:
    """Generate a short correlation id for one run."""
    return uuid.uuid4().hex[:12]


class AsyncRunner:
    """Runs probe checks off the caller's context.

    Each run delivers exactly Started, then one of Succeeded or Failed, to
    its sink. Runs share no state; notifications carry the run id so a
    shared sink can tell concurrent runs apart. The runner never cancels a
    started run; if the event loop does (at shutdown), the run reports
    Failed("cancelled") before giving up.
    """

    def __init__(self) -> None:
        # In-flight task -> its reachability timeout
        self._tasks: dict[asyncio.Task[None], float] = {}

    @property
    def pending(self) -> int:
        """Number of runs still in flight."""
        return len(self._tasks)

    @property
    def longest_timeout(self) -> float:
        """Largest timeout among in-flight runs, 0 when idle."""
        return max(self._tasks.values(), default=0.0)

    async def run(
        self,
        probe: "Probe",
        timeout: float,
        sink: "NotificationSink",
        run_id: str | None = None,
    ) -> None:
        """Emit Started, then schedule the check and return.

        Args:
            probe: Probe whose reachability is checked
            timeout: Reachability timeout in seconds
            sink: Receives the notifications
            run_id: Correlation id; generated when omitted

        Raises:
            ValueError: If timeout is not positive
        """
        if timeout <= 0:
            raise ValueError(f"Timeout must be positive: {timeout}")

        run_id = run_id or new_run_id()
        target = probe.target.address

        logger.info("Scheduling probe run=%s for %s (timeout=%gs)", run_id, target, timeout)
        await self._deliver(sink, ProbeNotification.started(run_id, target))

        task = asyncio.create_task(
            self._execute(probe, timeout, sink, run_id),
            name=f"probe-{run_id}",
        )
        self._tasks[task] = timeout
        task.add_done_callback(self._forget)

    def _forget(self, task: "asyncio.Task[None]") -> None:
        self._tasks.pop(task, None)

    async def _execute(
        self,
        probe: "Probe",
        timeout: float,
        sink: "NotificationSink",
        run_id: str,
    ) -> None:
        target = probe.target.address
        try:
            result = await probe.check_reachability(timeout)
        except asyncio.CancelledError:
            logger.warning("Probe run=%s for %s cancelled", run_id, target)
            await self._deliver(sink, ProbeNotification.failed(run_id, target, "cancelled"))
            raise
        except Exception as e:
            logger.exception("Probe run=%s for %s raised", run_id, target)
            notification = ProbeNotification.failed(
                run_id, target, f"{type(e).__name__}: {e}"
            )
        else:
            notification = self.to_notification(result, run_id, target)

        logger.info("Probe run=%s finished: %s", run_id, notification.topic)
        await self._deliver(sink, notification)

    @staticmethod
    def to_notification(
        result: "ProbeResult",
        run_id: str,
        target: str,
    ) -> ProbeNotification:
        """Map a probe result to its terminal notification."""
        if result.ok:
            return ProbeNotification.succeeded(run_id, target, result.describe())
        return ProbeNotification.failed(run_id, target, result.describe())

    async def _deliver(
        self,
        sink: "NotificationSink",
        notification: ProbeNotification,
    ) -> None:
        """Emit to the sink; delivery failures are logged, never raised."""
        try:
            await sink.emit(notification)
        except Exception as e:
            logger.warning(
                "Could not deliver %s for run=%s: %s: %s",
                notification.topic,
                notification.run_id,
                type(e).__name__,
                e,
            )

    async def drain(self, timeout: float | None = None) -> None:
        """Wait for in-flight runs to deliver their terminal notification.

        Args:
            timeout: Seconds to wait at most; None waits for all runs
        """
        if not self._tasks:
            return
        logger.info("Waiting for %d probe run(s) to finish", len(self._tasks))
        done, pending = await asyncio.wait(list(self._tasks), timeout=timeout)
        if pending:
            logger.warning("%d probe run(s) still running after drain", len(pending))
