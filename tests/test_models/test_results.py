"""Tests for probe results, command outcomes and notifications."""

import json

import pytest

from ssh_probe.errors import RemoteCommandFailure
from ssh_probe.models import (
    CommandFailure,
    CommandSuccess,
    Errored,
    ErrorKind,
    NotificationKind,
    ProbeNotification,
    Reachable,
    Unreachable,
    UnreachableReason,
)


class TestProbeResult:
    """Tests for the ProbeResult variants."""

    def test_only_reachable_is_ok(self) -> None:
        """Unreachable is a negative result, Errored a failure; neither is ok."""
        assert Reachable().ok is True
        assert Unreachable(UnreachableReason.REFUSED).ok is False
        assert Errored("boom").ok is False

    def test_describe_messages(self) -> None:
        """Each variant renders the user-facing reason."""
        assert Reachable().describe() == "reachable"
        assert Unreachable(UnreachableReason.TIMED_OUT).describe() == "unreachable within timeout"
        assert Unreachable(UnreachableReason.REFUSED).describe() == "connection refused"
        assert Errored("Cannot resolve x").describe() == "Cannot resolve x"

    def test_errored_defaults_to_transport_kind(self) -> None:
        """Errored without a kind is a transport error."""
        assert Errored("x").kind is ErrorKind.TRANSPORT


class TestCommandOutcome:
    """Tests for CommandSuccess / CommandFailure."""

    def test_success_raise_for_status_returns_self(self) -> None:
        """Successful outcomes pass through raise_for_status."""
        outcome = CommandSuccess(stdout="ok\n")
        assert outcome.raise_for_status() is outcome

    def test_failure_raise_for_status_raises(self) -> None:
        """Failures raise RemoteCommandFailure with status and stderr."""
        outcome = CommandFailure(stderr="No such file\n", returncode=2)
        with pytest.raises(RemoteCommandFailure) as exc_info:
            outcome.raise_for_status("u@h:22")

        error = exc_info.value
        assert error.returncode == 2
        assert error.address == "u@h:22"
        assert "exit code 2" in str(error)
        assert "No such file" in str(error)

    def test_timed_out_failure_message(self) -> None:
        """Timed-out failures report 'timed out' instead of an exit code."""
        outcome = CommandFailure(stderr="", returncode=None, timed_out=True)
        with pytest.raises(RemoteCommandFailure, match="timed out"):
            outcome.raise_for_status("u@h:22")


class TestProbeNotification:
    """Tests for ProbeNotification."""

    def test_topic_matches_kind(self) -> None:
        """Topic is the kind's channel name."""
        assert ProbeNotification.started("r1", "u@h:22").topic == "started"
        assert ProbeNotification.succeeded("r1", "u@h:22", "reachable").topic == "succeeded"
        assert ProbeNotification.failed("r1", "u@h:22", "refused").topic == "failed"

    def test_terminal_kinds(self) -> None:
        """Only succeeded and failed are terminal."""
        assert not NotificationKind.STARTED.is_terminal
        assert NotificationKind.SUCCEEDED.is_terminal
        assert NotificationKind.FAILED.is_terminal

    def test_to_dict_is_json_serializable(self) -> None:
        """to_dict output can be dumped as JSON."""
        notification = ProbeNotification.failed("r1", "u@h:22", "connection refused")
        data = json.loads(json.dumps(notification.to_dict()))

        assert data["run_id"] == "r1"
        assert data["topic"] == "failed"
        assert data["target"] == "u@h:22"
        assert data["message"] == "connection refused"
        assert "created_at" in data
