"""ssh-probe middleware components."""

from ssh_probe.middleware.auth import APIKeyMiddleware
from ssh_probe.middleware.base import ProbeMiddleware
from ssh_probe.middleware.errors import ErrorHandlingMiddleware
from ssh_probe.middleware.logging import LoggingMiddleware, redact_arguments

__all__ = [
    "APIKeyMiddleware",
    "ErrorHandlingMiddleware",
    "LoggingMiddleware",
    "ProbeMiddleware",
    "redact_arguments",
]
