"""Low-level TCP reachability primitives."""

import asyncio
import socket
from contextlib import suppress

from ssh_probe.errors import AddressResolutionError, TransportError


async def resolve_address(
    hostname: str,
    port: int,
    timeout: float,
) -> tuple[str, int]:
    """Resolve a host to the first connectable stream address.

    Args:
        hostname: Host name or IP literal.
        port: TCP port.
        timeout: Resolution budget in seconds.

    Returns:
        (ip, port) of the first SOCK_STREAM address.

    Raises:
        AddressResolutionError: If the resolver fails, times out, or
            returns no addresses.
    """
    loop = asyncio.get_running_loop()
    try:
        infos = await asyncio.wait_for(
            loop.getaddrinfo(hostname, port, type=socket.SOCK_STREAM),
            timeout=timeout,
        )
    except TimeoutError as e:
        raise AddressResolutionError(
            hostname, TimeoutError(f"resolution timed out after {timeout:g}s")
        ) from e
    except (socket.gaierror, UnicodeError) as e:
        raise AddressResolutionError(hostname, e) from e

    if not infos:
        raise AddressResolutionError(hostname, OSError("no addresses returned"))

    sockaddr = infos[0][4]
    return str(sockaddr[0]), int(sockaddr[1])


async def connect_once(ip: str, port: int, timeout: float) -> None:
    """Open and immediately close one TCP connection.

    The timeout cancels the pending connect itself, so no attempt
    outlives its budget.

    Raises:
        TimeoutError: No answer within timeout.
        ConnectionRefusedError: Remote actively refused the connection.
        TransportError: Any other socket failure.
    """
    try:
        _, writer = await asyncio.wait_for(
            asyncio.open_connection(ip, port),
            timeout=timeout,
        )
    except (TimeoutError, ConnectionRefusedError):
        raise
    except OSError as e:
        raise TransportError(f"{ip}:{port}", e) from e

    writer.close()
    # Peer may reset before we finish closing; the connect already succeeded
    with suppress(OSError):
        await writer.wait_closed()
