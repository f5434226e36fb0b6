"""Configuration module for ssh-probe.

- Config: Main configuration class (aggregates all components)
- HostKeyVerifier: Host key policy for the external ssh client
- Settings: Environment variable configuration
"""

from ssh_probe.config.host_keys import HostKeyVerifier
from ssh_probe.config.main import Config
from ssh_probe.config.settings import Settings

__all__ = ["Config", "HostKeyVerifier", "Settings"]
