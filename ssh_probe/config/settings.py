"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Probe limits
    probe_timeout: float = field(default=5.0)
    command_timeout: int = field(default=30)
    max_runs: int = field(default=100)

    # External client
    ssh_binary: str = field(default="ssh")
    sshpass_binary: str = field(default="sshpass")

    # Transport
    transport: str = field(default="http")
    http_host: str = field(default="127.0.0.1")
    http_port: int = field(default=8000)

    # Security
    api_keys: list[str] = field(default_factory=list)
    auth_enabled: bool = field(default=True)

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)
    log_payloads: bool = field(default=False)
    slow_threshold_ms: int = field(default=1000)
    include_traceback: bool = field(default=False)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from SSH_PROBE_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            probe_timeout=cls._get_timeout("SSH_PROBE_TIMEOUT", 5.0),
            command_timeout=cls._get_positive_int("SSH_PROBE_COMMAND_TIMEOUT", 30),
            max_runs=cls._get_positive_int("SSH_PROBE_MAX_RUNS", 100),
            ssh_binary=os.getenv("SSH_PROBE_SSH_BINARY", "ssh"),
            sshpass_binary=os.getenv("SSH_PROBE_SSHPASS_BINARY", "sshpass"),
            transport=cls._get_transport(),
            http_host=os.getenv("SSH_PROBE_HTTP_HOST", "127.0.0.1"),
            http_port=cls._get_positive_int("SSH_PROBE_HTTP_PORT", 8000),
            api_keys=cls._get_api_keys(),
            auth_enabled=cls._get_bool("SSH_PROBE_AUTH_ENABLED", True),
            log_level=os.getenv("SSH_PROBE_LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("SSH_PROBE_LOG_COLORS", True),
            log_payloads=cls._get_bool("SSH_PROBE_LOG_PAYLOADS", False),
            slow_threshold_ms=cls._get_positive_int("SSH_PROBE_SLOW_THRESHOLD_MS", 1000),
            include_traceback=cls._get_bool("SSH_PROBE_INCLUDE_TRACEBACK", False),
        )

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set or invalid

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

    @classmethod
    def _get_positive_int(cls, key: str, default: int) -> int:
        value = cls._get_int(key, default)
        if value <= 0:
            logger.warning("%s must be > 0, got %d. Using default: %d", key, value, default)
            return default
        return value

    @staticmethod
    def _get_timeout(key: str, default: float) -> float:
        """Get a positive float number of seconds from environment."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            seconds = float(value)
        except ValueError:
            logger.warning("Invalid float for %s: %s, using default %s", key, value, default)
            return default

        if seconds <= 0:
            logger.warning("%s must be > 0, got %s. Using default: %s", key, value, default)
            return default
        return seconds

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_api_keys() -> list[str]:
        value = os.getenv("SSH_PROBE_API_KEYS", "").strip()
        if not value:
            return []
        return [k.strip() for k in value.split(",") if k.strip()]

    @staticmethod
    def _get_transport() -> str:
        """Get transport ("http" or "stdio"), defaulting to http."""
        transport = os.getenv("SSH_PROBE_TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            return transport
        return "http"
