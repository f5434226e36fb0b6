"""Utilities for ssh-probe."""

from ssh_probe.utils.console import ColorfulFormatter, MCPRequestFormatter
from ssh_probe.utils.ping import connect_once, resolve_address
from ssh_probe.utils.validation import (
    validate_host,
    validate_port,
    validate_principal,
)

__all__ = [
    "ColorfulFormatter",
    "connect_once",
    "MCPRequestFormatter",
    "resolve_address",
    "validate_host",
    "validate_port",
    "validate_principal",
]
