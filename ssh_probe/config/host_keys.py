"""SSH host key verification.

Translates known_hosts settings into options for the external ssh client.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class HostKeyVerifier:
    """SSH host key verification manager.

    Verification is enforced by ssh itself: with strict checking on, an
    unknown or missing host key makes the remote command fail.
    """

    def __init__(
        self,
        known_hosts_path: str | None = None,
        strict_checking: bool = True,
    ):
        """Initialize host key verifier.

        Args:
            known_hosts_path: Path to known_hosts file or 'none' to disable
            strict_checking: Reject unknown host keys
        """
        self.strict_checking = strict_checking
        self._known_hosts = self._resolve_known_hosts(known_hosts_path)

    def _resolve_known_hosts(self, env_value: str | None) -> str | None:
        """Resolve known_hosts path.

        Returns:
            Path to known_hosts file or None to disable verification
        """
        if env_value and env_value.strip().lower() == "none":
            logger.critical(
                "SSH HOST KEY VERIFICATION DISABLED. "
                "This is INSECURE and vulnerable to MITM attacks. "
                "Only use in trusted networks for testing."
            )
            return None

        if env_value and env_value.strip():
            path = Path(os.path.expanduser(env_value.strip()))
        else:
            path = Path.home() / ".ssh" / "known_hosts"

        if not path.exists():
            if self.strict_checking:
                logger.warning(
                    "known_hosts not found at %s; every host will be rejected "
                    "until its key is added (ssh-keyscan <host> >> %s)",
                    path,
                    path,
                )
            else:
                logger.info("known_hosts not found at %s, new keys will be recorded", path)

        return str(path)

    def get_known_hosts_path(self) -> str | None:
        """Get path to known_hosts file.

        Returns:
            Path string or None if verification disabled
        """
        return self._known_hosts

    def is_enabled(self) -> bool:
        return self._known_hosts is not None

    def ssh_options(self) -> list[str]:
        """Build ssh -o arguments for host key handling.

        Returns:
            Flat argument list, e.g. ["-o", "StrictHostKeyChecking=yes", ...]
        """
        if self._known_hosts is None:
            return [
                "-o",
                "StrictHostKeyChecking=no",
                "-o",
                "UserKnownHostsFile=/dev/null",
            ]

        checking = "yes" if self.strict_checking else "accept-new"
        return [
            "-o",
            f"StrictHostKeyChecking={checking}",
            "-o",
            f"UserKnownHostsFile={self._known_hosts}",
        ]
