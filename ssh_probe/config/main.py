"""Application configuration.

Delegates to specialized components:
- HostKeyVerifier: Manages known_hosts handling for ssh
- Settings: Environment variables
"""

import os
from dataclasses import dataclass

from ssh_probe.config.host_keys import HostKeyVerifier
from ssh_probe.config.settings import Settings


@dataclass
class Config:
    """Application configuration.

    Aggregates environment settings and host key policy.
    """

    settings: Settings
    host_keys: HostKeyVerifier

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment.

        Returns:
            Configured instance with all components initialized
        """
        settings = Settings.from_env()
        host_keys = HostKeyVerifier(
            known_hosts_path=os.getenv("SSH_PROBE_KNOWN_HOSTS"),
            strict_checking=cls._get_bool_env("SSH_PROBE_STRICT_HOST_KEY_CHECKING", True),
        )
        return cls(settings=settings, host_keys=host_keys)

    @staticmethod
    def _get_bool_env(key: str, default: bool) -> bool:
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() != "false"

    # Delegate to settings for convenience
    @property
    def probe_timeout(self) -> float:
        """Default reachability timeout in seconds."""
        return self.settings.probe_timeout

    @property
    def command_timeout(self) -> int:
        """Remote command timeout in seconds."""
        return self.settings.command_timeout

    @property
    def max_runs(self) -> int:
        """Number of async runs kept in history."""
        return self.settings.max_runs

    @property
    def ssh_binary(self) -> str:
        return self.settings.ssh_binary

    @property
    def sshpass_binary(self) -> str:
        return self.settings.sshpass_binary

    @property
    def transport(self) -> str:
        """Transport type (http or stdio)."""
        return self.settings.transport

    @property
    def http_host(self) -> str:
        return self.settings.http_host

    @property
    def http_port(self) -> int:
        return self.settings.http_port

    @property
    def known_hosts_path(self) -> str | None:
        """Path to known_hosts file or None if disabled."""
        return self.host_keys.get_known_hosts_path()

    @property
    def strict_host_key_checking(self) -> bool:
        return self.host_keys.strict_checking
