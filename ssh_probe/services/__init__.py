"""Services for ssh-probe."""

from ssh_probe.services.probe import Probe
from ssh_probe.services.runner import AsyncRunner, new_run_id
from ssh_probe.services.sinks import ContextSink, FanoutSink, QueueSink, RunHistory
from ssh_probe.services.ssh_command import build_ssh_argv, run_ssh_command
from ssh_probe.services.state import (
    get_config,
    get_history,
    get_runner,
    reset_state,
    set_config,
)

__all__ = [
    "AsyncRunner",
    "ContextSink",
    "FanoutSink",
    "Probe",
    "QueueSink",
    "RunHistory",
    "build_ssh_argv",
    "get_config",
    "get_history",
    "get_runner",
    "new_run_id",
    "reset_state",
    "run_ssh_command",
    "set_config",
]
