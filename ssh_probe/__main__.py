"""Entry point for the ssh-probe server."""

import logging

from ssh_probe.server import http_middleware, mcp  # importing configures logging
from ssh_probe.services import get_config

logger = logging.getLogger(__name__)


def run_server() -> None:
    """Run the MCP server with configured transport."""
    config = get_config()

    if config.transport == "stdio":
        logger.info("Starting ssh-probe server (transport=stdio)")
        mcp.run(transport="stdio")
    else:
        logger.info(
            "Starting ssh-probe server (transport=http, host=%s, port=%d)",
            config.http_host,
            config.http_port,
        )
        mcp.run(
            transport="http",
            host=config.http_host,
            port=config.http_port,
            middleware=http_middleware(config),
        )


if __name__ == "__main__":
    run_server()
