"""Connection test tools exposed over MCP."""

import logging

from fastmcp import Context

from ssh_probe.errors import ProbeError
from ssh_probe.models import CommandFailure, ConnectionTarget, Errored, ProbeResult
from ssh_probe.services import (
    ContextSink,
    FanoutSink,
    Probe,
    get_config,
    get_history,
    get_runner,
    new_run_id,
)

logger = logging.getLogger(__name__)


def format_probe_result(result: ProbeResult, target: ConnectionTarget) -> str:
    """Render a probe result as a one-line user message."""
    if result.ok:
        return f"SSH connection test succeeded: {target.address} is reachable"
    if isinstance(result, Errored):
        return f"SSH connection test error: {result.detail}"
    return f"SSH connection test failed: {target.address} {result.describe()}"


async def check_connection(
    host: str,
    user: str,
    password: str = "",
    port: int = 22,
    timeout: float | None = None,
) -> str:
    """Check that a host's SSH port accepts TCP connections.

    Waits for the result. Use test_connection to run the check in the
    background instead.

    Args:
        host: Host name or IP address.
        user: SSH login name.
        password: SSH password (never logged).
        port: SSH port (default: 22).
        timeout: Seconds to wait (default: SSH_PROBE_TIMEOUT).

    Returns:
        One-line success, failure (refused / timed out) or error message.
    """
    config = get_config()
    try:
        target = ConnectionTarget(host=host, principal=user, secret=password, port=port)
        result = await Probe(target, config).check_reachability(
            config.probe_timeout if timeout is None else timeout
        )
    except ValueError as e:
        return f"Error: {e}"

    return format_probe_result(result, target)


async def test_connection(
    host: str,
    user: str,
    password: str = "",
    port: int = 22,
    timeout: float | None = None,
    ctx: Context | None = None,
) -> str:
    """Start a background connection test and return immediately.

    Progress arrives as MCP log messages ("started", then "succeeded" or
    "failed") and is recorded at probe://runs/{run_id}.

    Args:
        host: Host name or IP address.
        user: SSH login name.
        password: SSH password (never logged).
        port: SSH port (default: 22).
        timeout: Seconds to wait (default: SSH_PROBE_TIMEOUT).

    Returns:
        Acknowledgement with the run id.
    """
    config = get_config()
    try:
        target = ConnectionTarget(host=host, principal=user, secret=password, port=port)
    except ValueError as e:
        return f"Error: {e}"

    sinks = [get_history()]
    if ctx is not None:
        sinks.append(ContextSink(ctx))

    run_id = new_run_id()
    try:
        await get_runner().run(
            Probe(target, config),
            timeout=config.probe_timeout if timeout is None else timeout,
            sink=FanoutSink(sinks),
            run_id=run_id,
        )
    except ValueError as e:
        return f"Error: {e}"

    return f"Connection test started for {target.address} (run {run_id}). Results: probe://runs/{run_id}"


async def run_remote_command(
    host: str,
    user: str,
    command: str,
    password: str = "",
    port: int = 22,
    timeout: float | None = None,
) -> str:
    """Run a single command on a remote host through the ssh client.

    Args:
        host: Host name or IP address.
        user: SSH login name.
        command: Command to run on the remote host.
        password: SSH password (never logged; omit for key-based login).
        port: SSH port (default: 22).
        timeout: Seconds before the command is killed
            (default: SSH_PROBE_COMMAND_TIMEOUT).

    Returns:
        Command output, or stderr and exit code on failure.
    """
    config = get_config()
    try:
        target = ConnectionTarget(host=host, principal=user, secret=password, port=port)
        outcome = await Probe(target, config).execute_command(
            command,
            timeout=config.command_timeout if timeout is None else timeout,
        )
    except (ValueError, ProbeError) as e:
        return f"Error: {e}"

    if isinstance(outcome, CommandFailure):
        if outcome.timed_out:
            return f"Error: {outcome.stderr}"
        output_parts = []
        if outcome.stderr:
            output_parts.append(f"[stderr]\n{outcome.stderr}")
        output_parts.append(f"[exit code: {outcome.returncode}]")
        return "\n".join(output_parts)

    return outcome.stdout or "(no output)"
