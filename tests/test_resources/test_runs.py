"""Tests for run history resources."""

import json

import pytest
from fastmcp.exceptions import ResourceError

from ssh_probe.models import ProbeNotification
from ssh_probe.resources import list_runs_resource, run_resource
from ssh_probe.services import get_history


@pytest.mark.asyncio
async def test_list_runs_empty() -> None:
    assert await list_runs_resource() == "No connection tests recorded."


@pytest.mark.asyncio
async def test_list_runs_newest_first_with_state() -> None:
    """Runs without a terminal notification show as running."""
    history = get_history()
    await history.emit(ProbeNotification.started("aaa", "u@h1:22"))
    await history.emit(ProbeNotification.failed("aaa", "u@h1:22", "connection refused"))
    await history.emit(ProbeNotification.started("bbb", "u@h2:22"))

    result = await list_runs_resource()
    lines = result.splitlines()

    running = lines.index("[running] bbb  u@h2:22")
    failed = lines.index("[failed] aaa  u@h1:22  (connection refused)")
    assert running < failed


@pytest.mark.asyncio
async def test_run_resource_returns_json() -> None:
    history = get_history()
    await history.emit(ProbeNotification.started("aaa", "u@h:22"))
    await history.emit(ProbeNotification.succeeded("aaa", "u@h:22", "reachable"))

    data = json.loads(await run_resource("aaa"))

    assert [event["topic"] for event in data] == ["started", "succeeded"]
    assert data[1]["message"] == "reachable"


@pytest.mark.asyncio
async def test_run_resource_unknown() -> None:
    with pytest.raises(ResourceError, match="Unknown run 'nope'"):
        await run_resource("nope")
