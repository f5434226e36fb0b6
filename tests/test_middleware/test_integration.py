"""Integration tests for middleware with the server."""

import pytest
from fastmcp import FastMCP

from ssh_probe.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from ssh_probe.server import configure_middleware


def test_configure_middleware_order() -> None:
    """ErrorHandling is added first (innermost), then Logging."""
    server = FastMCP("test")

    configure_middleware(server)

    middleware_types = [type(m).__name__ for m in server.middleware]
    assert middleware_types == ["ErrorHandlingMiddleware", "LoggingMiddleware"]


def test_configure_middleware_respects_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    """Middleware configuration respects environment variables."""
    monkeypatch.setenv("SSH_PROBE_LOG_PAYLOADS", "true")
    monkeypatch.setenv("SSH_PROBE_SLOW_THRESHOLD_MS", "500")
    monkeypatch.setenv("SSH_PROBE_INCLUDE_TRACEBACK", "true")
    server = FastMCP("test")

    configure_middleware(server)

    logging_mw = next(m for m in server.middleware if isinstance(m, LoggingMiddleware))
    error_mw = next(m for m in server.middleware if isinstance(m, ErrorHandlingMiddleware))
    assert logging_mw.include_payloads is True
    assert logging_mw.slow_threshold_ms == 500.0
    assert error_mw.include_traceback is True
