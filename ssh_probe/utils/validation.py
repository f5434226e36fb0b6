"""Input validation for connection parameters."""

from typing import Final

# Characters that could be read as shell syntax or ssh options
SUSPICIOUS_HOST_CHARS: Final[list[str]] = [
    "/",
    "\\",
    ";",
    "&",
    "|",
    "$",
    "`",
    "\n",
    "\r",
    "\x00",
]


def validate_host(host: str) -> str:
    """Validate a host name or IP address.

    Args:
        host: The host name to validate

    Returns:
        Validated host name

    Raises:
        ValueError: If host name is invalid
    """
    if not host:
        raise ValueError("Host cannot be empty")

    if len(host) > 253:
        raise ValueError(f"Host name too long: {len(host)} chars")

    # ssh would parse a leading dash as an option
    if host.startswith("-"):
        raise ValueError(f"Host cannot start with '-': {host!r}")

    if any(c.isspace() for c in host):
        raise ValueError(f"Host contains whitespace: {host!r}")

    for char in SUSPICIOUS_HOST_CHARS:
        if char in host:
            raise ValueError(f"Host contains invalid characters: {host!r}")

    return host


def validate_port(port: int) -> int:
    """Validate a TCP port number.

    Raises:
        ValueError: If port is outside 1-65535
    """
    if isinstance(port, bool) or not isinstance(port, int):
        raise ValueError(f"Port must be an integer: {port!r}")
    if not 1 <= port <= 65535:
        raise ValueError(f"Port out of range (1-65535): {port}")
    return port


def validate_principal(principal: str) -> str:
    """Validate an SSH login name.

    Raises:
        ValueError: If the name is empty or could be misparsed by ssh
    """
    if not principal:
        raise ValueError("User cannot be empty")
    if principal.startswith("-"):
        raise ValueError(f"User cannot start with '-': {principal!r}")
    if "@" in principal or "\x00" in principal:
        raise ValueError(f"User contains invalid characters: {principal!r}")
    if any(c.isspace() for c in principal):
        raise ValueError(f"User contains whitespace: {principal!r}")
    return principal
