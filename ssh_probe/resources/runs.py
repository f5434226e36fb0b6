"""Run history resources for background connection tests."""

import json

from fastmcp.exceptions import ResourceError

from ssh_probe.services import get_history


async def list_runs_resource() -> str:
    """List recorded connection test runs with their latest state.

    Returns:
        Plain text table, newest run first.
    """
    history = get_history()
    run_ids = history.runs()

    if not run_ids:
        return "No connection tests recorded."

    lines = ["Connection Test Runs", "=" * 40, ""]
    for run_id in reversed(run_ids):
        latest = history.latest(run_id)
        if latest is None:
            continue
        state = latest.topic if latest.kind.is_terminal else "running"
        line = f"[{state}] {run_id}  {latest.target}"
        if latest.message:
            line = f"{line}  ({latest.message})"
        lines.append(line)

    lines.append("")
    lines.append("Details: probe://runs/{run_id}")
    return "\n".join(lines)


async def run_resource(run_id: str) -> str:
    """Notifications recorded for one run, as JSON.

    Args:
        run_id: Id returned by the test_connection tool

    Returns:
        JSON array of notifications in emission order

    Raises:
        ResourceError: If the run is unknown or was evicted
    """
    events = get_history().get(run_id)
    if events is None:
        raise ResourceError(f"Unknown run '{run_id}'")
    return json.dumps([event.to_dict() for event in events], indent=2)
