"""Remote command execution through the external ssh client.

The command and connection parameters travel as separate argv entries to
create_subprocess_exec, so nothing is interpreted by a local shell. The
password reaches sshpass through the child's environment (SSHPASS), which
unlike argv is not visible to other users in process listings.
"""

import asyncio
import logging
import math
import os
from contextlib import suppress
from typing import TYPE_CHECKING

from ssh_probe.errors import ProcessSpawnError
from ssh_probe.models import CommandFailure, CommandOutcome, CommandSuccess

if TYPE_CHECKING:
    from ssh_probe.config import Config
    from ssh_probe.models import ConnectionTarget

logger = logging.getLogger(__name__)

# sshpass reports its own failures through these exit codes
SSHPASS_EXIT_CODES = {
    2: "sshpass: conflicting arguments",
    3: "sshpass: general runtime error",
    4: "sshpass: unrecognized response from ssh",
    5: "Permission denied: invalid password",
    6: "Host key unknown; add it to known_hosts first",
}


def build_ssh_argv(
    target: "ConnectionTarget",
    command: str,
    *,
    ssh_binary: str = "ssh",
    sshpass_binary: str = "sshpass",
    host_key_options: list[str] | None = None,
    connect_timeout: float | None = None,
) -> list[str]:
    """Build the argument vector for one remote command.

    The secret is never part of the result.

    Args:
        target: Where and as whom to connect
        command: Remote command text, passed as a single argument
        ssh_binary: ssh executable
        sshpass_binary: sshpass executable, used only when a secret is set
        host_key_options: Extra "-o" options for host key handling
        connect_timeout: ssh ConnectTimeout in seconds

    Returns:
        argv list suitable for create_subprocess_exec
    """
    argv: list[str] = []
    if target.secret:
        argv += [sshpass_binary, "-e"]

    argv += [ssh_binary, "-p", str(target.port), "-l", target.principal]

    if target.secret:
        argv += ["-o", "NumberOfPasswordPrompts=1"]
    else:
        argv += ["-o", "BatchMode=yes"]

    if connect_timeout is not None:
        argv += ["-o", f"ConnectTimeout={max(1, math.ceil(connect_timeout))}"]

    argv += host_key_options or []
    argv += ["--", target.host, command]
    return argv


def build_ssh_env(target: "ConnectionTarget") -> dict[str, str] | None:
    """Build the child environment carrying the secret for sshpass -e.

    Returns:
        Environment mapping, or None to inherit ours unchanged
    """
    if not target.secret:
        return None
    env = dict(os.environ)
    env["SSHPASS"] = target.secret
    return env


async def _kill(process: asyncio.subprocess.Process) -> None:
    """Kill the client if it is still running and reap it."""
    if process.returncode is None:
        with suppress(ProcessLookupError):
            process.kill()
    await process.wait()


def _decode(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


async def run_ssh_command(
    target: "ConnectionTarget",
    command: str,
    config: "Config",
    timeout: float | None = None,
) -> CommandOutcome:
    """Run one command on the target and wait for it to finish.

    Args:
        target: Where and as whom to connect
        command: Remote command text
        config: Supplies client binaries and host key policy
        timeout: Seconds before the client is killed (None waits forever)

    Returns:
        CommandSuccess on exit status 0, CommandFailure otherwise

    Raises:
        ValueError: If command is empty or timeout is not positive
        ProcessSpawnError: If the client binary cannot be started
    """
    if not command or not command.strip():
        raise ValueError("Command cannot be empty")
    if timeout is not None and timeout <= 0:
        raise ValueError(f"Timeout must be positive: {timeout}")

    argv = build_ssh_argv(
        target,
        command,
        ssh_binary=config.ssh_binary,
        sshpass_binary=config.sshpass_binary,
        host_key_options=config.host_keys.ssh_options(),
        connect_timeout=config.probe_timeout,
    )

    logger.debug("Spawning %s for %s", argv[0], target.address)

    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=build_ssh_env(target),
        )
    except OSError as e:
        logger.error("Cannot spawn %s: %s", argv[0], e)
        raise ProcessSpawnError(argv[0], e) from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except TimeoutError:
        await _kill(process)
        logger.warning("Command on %s timed out after %ss", target.address, timeout)
        return CommandFailure(
            stderr=f"Command timed out after {timeout:g}s",
            returncode=None,
            timed_out=True,
        )
    except asyncio.CancelledError:
        await _kill(process)
        logger.info("Command on %s cancelled; client killed", target.address)
        raise

    returncode = process.returncode if process.returncode is not None else -1
    if returncode == 0:
        logger.debug("Command on %s succeeded", target.address)
        return CommandSuccess(stdout=_decode(stdout))

    error = _decode(stderr)
    if not error.strip() and target.secret:
        error = SSHPASS_EXIT_CODES.get(returncode, "")

    logger.info("Command on %s failed with exit code %d", target.address, returncode)
    return CommandFailure(stderr=error, returncode=returncode)
