"""SSH reachability and remote-command probe served over MCP."""

__version__ = "0.1.0"
