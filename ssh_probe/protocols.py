"""Protocol interfaces for dependency inversion.

Usage Example:

    from ssh_probe.protocols import NotificationSink

    class PrintSink:
        async def emit(self, notification):
            print(notification.topic, notification.message)

    await runner.run(probe, timeout=5.0, sink=PrintSink())
"""

from typing import Protocol, runtime_checkable

from ssh_probe.models import ProbeNotification


@runtime_checkable
class NotificationSink(Protocol):
    """Caller-owned channel receiving probe lifecycle notifications.

    Delivery is best effort: the runner logs and drops any exception
    raised by emit(), so a torn-down sink never crashes a run.
    """

    async def emit(self, notification: ProbeNotification) -> None:
        """Deliver one notification.

        Args:
            notification: Event to deliver; notification.topic names
                the channel ("started", "succeeded", "failed").
        """
        ...
