"""Reachability check outcomes."""

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias


class UnreachableReason(str, Enum):
    """Why a connection attempt did not complete."""

    TIMED_OUT = "timed_out"
    REFUSED = "refused"


class ErrorKind(str, Enum):
    """Category of a failed reachability check."""

    ADDRESS_RESOLUTION = "address_resolution"
    TRANSPORT = "transport"


@dataclass(frozen=True)
class Reachable:
    """TCP connection to the SSH port was established."""

    @property
    def ok(self) -> bool:
        return True

    def describe(self) -> str:
        return "reachable"


@dataclass(frozen=True)
class Unreachable:
    """Expected negative result: refused or no answer in time."""

    reason: UnreachableReason

    @property
    def ok(self) -> bool:
        return False

    def describe(self) -> str:
        if self.reason is UnreachableReason.TIMED_OUT:
            return "unreachable within timeout"
        return "connection refused"


@dataclass(frozen=True)
class Errored:
    """The check could not be carried out."""

    detail: str
    kind: ErrorKind = ErrorKind.TRANSPORT

    @property
    def ok(self) -> bool:
        return False

    def describe(self) -> str:
        return self.detail


ProbeResult: TypeAlias = Reachable | Unreachable | Errored
