"""Data models for ssh-probe."""

from ssh_probe.models.command import CommandFailure, CommandOutcome, CommandSuccess
from ssh_probe.models.notification import NotificationKind, ProbeNotification
from ssh_probe.models.probe import (
    Errored,
    ErrorKind,
    ProbeResult,
    Reachable,
    Unreachable,
    UnreachableReason,
)
from ssh_probe.models.target import ConnectionTarget

__all__ = [
    "CommandFailure",
    "CommandOutcome",
    "CommandSuccess",
    "ConnectionTarget",
    "Errored",
    "ErrorKind",
    "NotificationKind",
    "ProbeNotification",
    "ProbeResult",
    "Reachable",
    "Unreachable",
    "UnreachableReason",
]
