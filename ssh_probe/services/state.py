"""Global state management for ssh-probe."""

from ssh_probe.config import Config
from ssh_probe.services.runner import AsyncRunner
from ssh_probe.services.sinks import RunHistory

# Global state (initialized on first access)
_config: Config | None = None
_runner: AsyncRunner | None = None
_history: RunHistory | None = None


def get_config() -> Config:
    """Get or create config."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def get_runner() -> AsyncRunner:
    """Get or create the async runner."""
    global _runner
    if _runner is None:
        _runner = AsyncRunner()
    return _runner


def get_history() -> RunHistory:
    """Get or create the run history sized from config."""
    global _history
    if _history is None:
        _history = RunHistory(max_runs=get_config().max_runs)
    return _history


def reset_state() -> None:
    """Reset global state for testing.

    Clears the singleton instances so tests start with fresh state.
    """
    global _config, _runner, _history
    _config = None
    _runner = None
    _history = None


def set_config(config: Config) -> None:
    """Set the global config instance.

    Args:
        config: Config instance to use globally.
    """
    global _config
    _config = config
