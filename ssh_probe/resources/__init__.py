"""MCP resources for ssh-probe."""

from ssh_probe.resources.runs import list_runs_resource, run_resource

__all__ = ["list_runs_resource", "run_resource"]
