"""Exceptions raised by probe operations.

Refused and timed-out connections are not represented here: they are
ordinary negative probe results (see ``UnreachableReason``).
"""


class ProbeError(Exception):
    """Base class for probe failures surfaced to the caller."""


class AddressResolutionError(ProbeError):
    """Host name could not be resolved to a connectable address."""

    def __init__(self, host: str, original_error: BaseException):
        """Initialize resolution error.

        Args:
            host: Host name that failed to resolve
            original_error: Resolver exception (usually socket.gaierror)
        """
        self.host = host
        self.original_error = original_error
        super().__init__(f"Cannot resolve {host}: {original_error}")


class TransportError(ProbeError):
    """TCP connection failed for a reason other than refusal or timeout."""

    def __init__(self, address: str, original_error: OSError):
        """Initialize transport error.

        Args:
            address: host:port the connection was attempted against
            original_error: Underlying OSError
        """
        self.address = address
        self.original_error = original_error
        super().__init__(f"Cannot connect to {address}: {original_error}")


class ProcessSpawnError(ProbeError):
    """External SSH client is missing or cannot be executed."""

    def __init__(self, program: str, original_error: OSError):
        self.program = program
        self.original_error = original_error
        super().__init__(f"Cannot run {program}: {original_error}")


class RemoteCommandFailure(ProbeError):
    """Remote command exited with a nonzero status or timed out."""

    def __init__(self, address: str, returncode: int | None, stderr: str):
        """Initialize command failure.

        Args:
            address: principal@host:port the command ran against
            returncode: Exit status, or None when the command timed out
            stderr: Captured standard error
        """
        self.address = address
        self.returncode = returncode
        self.stderr = stderr
        status = "timed out" if returncode is None else f"exit code {returncode}"
        detail = stderr.strip()
        message = f"Command on {address} failed ({status})"
        super().__init__(f"{message}: {detail}" if detail else message)
