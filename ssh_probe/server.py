"""ssh-probe FastMCP server.

Thin wrapper that wires the MCP server to the tools, resources and
services modules, where all probe logic lives.
"""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from ssh_probe.config import Config, Settings
from ssh_probe.middleware import (
    APIKeyMiddleware,
    ErrorHandlingMiddleware,
    LoggingMiddleware,
)
from ssh_probe.resources import list_runs_resource, run_resource
from ssh_probe.services import get_config, get_runner
from ssh_probe.tools import check_connection, run_remote_command, test_connection
from ssh_probe.utils.console import MCPRequestFormatter


def _configure_logging() -> None:
    """Configure colorful logging for the ssh_probe package.

    Called at module load time so logging is ready however the server
    is started.
    """
    settings = Settings.from_env()
    use_colors = settings.log_colors and sys.stderr.isatty()

    probe_logger = logging.getLogger("ssh_probe")
    probe_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    # Only add handler if not already configured
    if not probe_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(MCPRequestFormatter(use_colors=use_colors))
        probe_logger.addHandler(handler)
        probe_logger.propagate = False

    for noisy_logger in [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "httpx",
        "httpcore",
        "fastmcp",
        "starlette",
        "anyio",
    ]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)


_configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Log startup and let in-flight probe runs finish on shutdown.

    Args:
        server: The FastMCP server instance

    Yields:
        Empty lifespan context
    """
    config = get_config()
    logger.info(
        "ssh-probe server starting up (probe_timeout=%gs, command_timeout=%ds, "
        "ssh=%s, host_key_checking=%s)",
        config.probe_timeout,
        config.command_timeout,
        config.ssh_binary,
        "strict" if config.strict_host_key_checking else "accept-new",
    )
    logger.info("ssh-probe server ready to accept connections")

    try:
        yield {}
    finally:
        logger.info("ssh-probe server shutting down")
        runner = get_runner()
        if runner.pending:
            await runner.drain(timeout=runner.longest_timeout)
        logger.info("ssh-probe server shutdown complete")


def configure_middleware(server: FastMCP) -> None:
    """Add MCP middleware: ErrorHandling (innermost) then Logging.

    Environment variables:
        SSH_PROBE_LOG_PAYLOADS: Log (redacted) payloads at DEBUG
        SSH_PROBE_SLOW_THRESHOLD_MS: Slow request threshold (default: 1000)
        SSH_PROBE_INCLUDE_TRACEBACK: Include tracebacks in error logs

    Args:
        server: The FastMCP server to configure.
    """
    settings = Settings.from_env()

    server.add_middleware(ErrorHandlingMiddleware(include_traceback=settings.include_traceback))
    server.add_middleware(
        LoggingMiddleware(
            include_payloads=settings.log_payloads,
            slow_threshold_ms=settings.slow_threshold_ms,
        )
    )


def http_middleware(config: Config) -> list[Middleware]:
    """Starlette middleware for the HTTP transport.

    Args:
        config: Supplies API keys and the auth switch

    Returns:
        Middleware list to pass to mcp.run() or http_app()
    """
    settings = config.settings
    if not settings.api_keys:
        logger.warning(
            "No API keys configured (SSH_PROBE_API_KEYS not set). "
            "Authentication disabled - keep the HTTP bind address local!"
        )
        return []

    if not settings.auth_enabled:
        logger.warning("API key authentication DISABLED via SSH_PROBE_AUTH_ENABLED=false")
        return []

    logger.info("API key authentication enabled (%d key(s) configured)", len(settings.api_keys))
    return [
        Middleware(
            APIKeyMiddleware,
            api_keys=settings.api_keys,
            enabled=settings.auth_enabled,
        )
    ]


def create_server() -> FastMCP:
    """Create and configure the MCP server with middleware, tools and resources.

    Returns:
        Configured FastMCP server instance
    """
    server = FastMCP("ssh_probe", lifespan=app_lifespan)

    configure_middleware(server)

    server.tool()(check_connection)
    server.tool()(test_connection)
    server.tool()(run_remote_command)

    server.resource(
        "probe://runs",
        name="connection test runs",
        mime_type="text/plain",
    )(list_runs_resource)
    server.resource(
        "probe://runs/{run_id}",
        name="connection test run",
        mime_type="application/json",
    )(run_resource)

    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server


# Default server instance
mcp = create_server()
