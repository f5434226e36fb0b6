"""Remote command execution outcomes."""

from dataclasses import dataclass
from typing import NoReturn, TypeAlias

from ssh_probe.errors import RemoteCommandFailure


@dataclass(frozen=True)
class CommandSuccess:
    """Remote command exited with status 0."""

    stdout: str
    returncode: int = 0

    def raise_for_status(self, address: str = "") -> "CommandSuccess":
        return self


@dataclass(frozen=True)
class CommandFailure:
    """Remote command exited nonzero, or was killed after its timeout."""

    stderr: str
    returncode: int | None = None
    timed_out: bool = False

    def raise_for_status(self, address: str = "") -> NoReturn:
        """Raise the failure as an exception.

        Args:
            address: Target label included in the error message

        Raises:
            RemoteCommandFailure: Always
        """
        raise RemoteCommandFailure(address, self.returncode, self.stderr)


CommandOutcome: TypeAlias = CommandSuccess | CommandFailure
