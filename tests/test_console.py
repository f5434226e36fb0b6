"""Tests for the console log formatters."""

import logging
import sys

from ssh_probe.utils.console import COLORS, ColorfulFormatter, MCPRequestFormatter


def make_record(
    msg: str,
    *args: object,
    name: str = "ssh_probe.services.runner",
    level: int = logging.INFO,
    exc_info: object = None,
) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, msg, args, exc_info)


def test_plain_format_has_all_columns() -> None:
    """Without colors the line is 'time | level | component | message'."""
    line = ColorfulFormatter(use_colors=False).format(make_record("hello %s", "world"))
    parts = [part.strip() for part in line.split("|")]

    assert parts[1] == "INFO"
    assert parts[2] == "services.runner"
    assert parts[3] == "hello world"
    assert "\033[" not in line


def test_colors_highlight_run_and_address() -> None:
    line = ColorfulFormatter(use_colors=True).format(
        make_record("Probe run=%s for %s", "abc123", "deploy@10.0.0.5:22")
    )
    assert f"{COLORS['cyan']}run=abc123" in line
    assert f"{COLORS['magenta']}deploy@10.0.0.5:22" in line


def test_exception_included() -> None:
    try:
        raise RuntimeError("kaboom")
    except RuntimeError:
        record = make_record("Probe raised", level=logging.ERROR, exc_info=sys.exc_info())

    line = ColorfulFormatter(use_colors=False).format(record)
    assert "RuntimeError: kaboom" in line


def test_request_formatter_markers() -> None:
    formatter = MCPRequestFormatter(use_colors=True)

    assert ">>>" in formatter.format(make_record("ssh-probe server starting up"))
    assert "!!" in formatter.format(make_record("Probe run=1 finished: failed"))
    assert "OK" in formatter.format(make_record("Probe deploy@h:22: reachable"))
    assert "+" in formatter.format(make_record("Scheduling probe run=1"))


def test_request_formatter_plain_has_no_markers() -> None:
    line = MCPRequestFormatter(use_colors=False).format(make_record("server starting up"))
    assert not line.startswith(">>>")
