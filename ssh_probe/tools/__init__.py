"""MCP tools for ssh-probe."""

from ssh_probe.tools.probe import check_connection, run_remote_command, test_connection

__all__ = ["check_connection", "run_remote_command", "test_connection"]
