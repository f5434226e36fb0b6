"""Lifecycle notifications emitted by the async runner."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class NotificationKind(str, Enum):
    """Notification topic; one STARTED then one terminal kind per run."""

    STARTED = "started"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not NotificationKind.STARTED


@dataclass(frozen=True)
class ProbeNotification:
    """One event in the lifetime of an asynchronous probe run."""

    run_id: str
    kind: NotificationKind
    target: str
    message: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def topic(self) -> str:
        """Channel name for this notification kind."""
        return self.kind.value

    @classmethod
    def started(cls, run_id: str, target: str) -> "ProbeNotification":
        return cls(run_id=run_id, kind=NotificationKind.STARTED, target=target)

    @classmethod
    def succeeded(cls, run_id: str, target: str, message: str) -> "ProbeNotification":
        return cls(
            run_id=run_id,
            kind=NotificationKind.SUCCEEDED,
            target=target,
            message=message,
        )

    @classmethod
    def failed(cls, run_id: str, target: str, message: str) -> "ProbeNotification":
        return cls(
            run_id=run_id,
            kind=NotificationKind.FAILED,
            target=target,
            message=message,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON resources."""
        return {
            "run_id": self.run_id,
            "topic": self.topic,
            "target": self.target,
            "message": self.message,
            "created_at": self.created_at.isoformat(),
        }
