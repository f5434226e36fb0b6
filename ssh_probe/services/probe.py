"""One-shot reachability and remote-command probe."""

import asyncio
import logging
from typing import TYPE_CHECKING

from ssh_probe.errors import AddressResolutionError, TransportError
from ssh_probe.models import (
    CommandOutcome,
    Errored,
    ErrorKind,
    ProbeResult,
    Reachable,
    Unreachable,
    UnreachableReason,
)
from ssh_probe.services.ssh_command import run_ssh_command
from ssh_probe.utils.ping import connect_once, resolve_address

if TYPE_CHECKING:
    from ssh_probe.config import Config
    from ssh_probe.models import ConnectionTarget

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0
DEFAULT_COMMAND_TIMEOUT = 30.0


class Probe:
    """Reachability check and remote command execution against one target.

    Example:
        probe = Probe(ConnectionTarget("10.0.0.5", "deploy", secret))
        result = await probe.check_reachability(timeout=3.0)
        if result.ok:
            outcome = await probe.execute_command("uname -a")
    """

    def __init__(self, target: "ConnectionTarget", config: "Config | None" = None):
        """Initialize probe.

        Args:
            target: Connection parameters
            config: Client binaries and host key policy for execute_command.
                Defaults to the global config.
        """
        self.target = target
        self._config = config

    @property
    def config(self) -> "Config":
        if self._config is None:
            from ssh_probe.services.state import get_config

            self._config = get_config()
        return self._config

    async def check_reachability(self, timeout: float = DEFAULT_TIMEOUT) -> ProbeResult:
        """Check whether the target's SSH port accepts TCP connections.

        Single attempt; resolution and connect share one timeout budget.
        Refusal and timeout are returned as Unreachable, never raised.

        Args:
            timeout: Total budget in seconds

        Returns:
            Reachable, Unreachable(reason) or Errored(detail, kind)

        Raises:
            ValueError: If timeout is not positive
        """
        if timeout <= 0:
            raise ValueError(f"Timeout must be positive: {timeout}")

        target = self.target
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout

        try:
            ip, port = await resolve_address(target.host, target.port, timeout)
        except AddressResolutionError as e:
            logger.info("Probe %s: %s", target.address, e)
            return Errored(str(e), ErrorKind.ADDRESS_RESOLUTION)

        remaining = deadline - loop.time()
        if remaining <= 0:
            logger.info("Probe %s: timed out during resolution", target.address)
            return Unreachable(UnreachableReason.TIMED_OUT)

        try:
            await connect_once(ip, port, remaining)
        except TimeoutError:
            logger.info("Probe %s: timed out after %gs", target.address, timeout)
            return Unreachable(UnreachableReason.TIMED_OUT)
        except ConnectionRefusedError:
            logger.info("Probe %s: connection refused", target.address)
            return Unreachable(UnreachableReason.REFUSED)
        except TransportError as e:
            logger.warning("Probe %s: %s", target.address, e)
            return Errored(str(e), ErrorKind.TRANSPORT)

        logger.info("Probe %s: reachable", target.address)
        return Reachable()

    async def execute_command(
        self,
        command: str,
        timeout: float | None = DEFAULT_COMMAND_TIMEOUT,
    ) -> CommandOutcome:
        """Run a single command on the target via the external ssh client.

        Args:
            command: Remote command text
            timeout: Seconds before the client is killed and a timed-out
                CommandFailure is returned

        Returns:
            CommandSuccess(stdout) or CommandFailure(stderr)

        Raises:
            ValueError: If command is empty or timeout is not positive
            ProcessSpawnError: If the ssh client cannot be started
        """
        return await run_ssh_command(self.target, command, self.config, timeout=timeout)
