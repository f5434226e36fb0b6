"""Colorful console logging formatter."""

import logging
import re
from datetime import datetime

RESET = "\033[0m"
DIM = "\033[2m"
BOLD = "\033[1m"

# ANSI color codes
COLORS = {
    "white": "\033[37m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "grey": "\033[90m",
    "red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "blue": "\033[94m",
    "magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

LEVEL_COLORS = {
    "DEBUG": COLORS["grey"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + BOLD,
}

# Logger name prefix -> color, first match wins
COMPONENT_COLORS = [
    ("ssh_probe.server", COLORS["bright_cyan"]),
    ("ssh_probe.services.runner", COLORS["magenta"]),
    ("ssh_probe.services", COLORS["blue"]),
    ("ssh_probe.tools", COLORS["blue"]),
    ("ssh_probe.resources", COLORS["cyan"]),
    ("ssh_probe.middleware", COLORS["yellow"]),
    ("ssh_probe.config", COLORS["green"]),
]

# Message fragments worth picking out: resource URIs, durations,
# user@host:port targets and run ids
HIGHLIGHTS = [
    ("://", re.compile(r"(\w+://\S+)"), COLORS["blue"]),
    ("ms", re.compile(r"(\d+(?:\.\d+)?ms)"), COLORS["bright_yellow"]),
    ("@", re.compile(r"([\w.\-]+@[\w.\-:\[\]]+:\d+)"), COLORS["magenta"]),
    ("run", re.compile(r"(run[= ][0-9a-f]{6,})"), COLORS["cyan"]),
]

# Lifecycle markers, checked in order against the lowercased message
MARKERS = [
    (("starting", "ready"), COLORS["bright_green"], ">>>"),
    (("shutting down", "shutdown"), COLORS["red"], "<<<"),
    (("error", "failed", "cannot"), COLORS["red"], "!!"),
    (("refused", "timed out", "slow"), COLORS["bright_yellow"], "!"),
    (("reachable", "succeeded"), COLORS["bright_green"], "OK"),
    (("scheduling", "spawning"), COLORS["bright_cyan"], "+"),
]


class ColorfulFormatter(logging.Formatter):
    """Formats records as 'time | level | component | message'.

    The component is the logger name without the package prefix. With
    colors on, levels, components and notable message fragments are
    colored.
    """

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
        """
        super().__init__()
        self.use_colors = use_colors

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{RESET}" if self.use_colors else text

    def _component(self, name: str) -> str:
        color = next(
            (c for prefix, c in COMPONENT_COLORS if name.startswith(prefix)),
            COLORS["white"],
        )
        return self._paint(f"{name.removeprefix('ssh_probe.'):<20}", color)

    def _highlight(self, message: str) -> str:
        if not self.use_colors:
            return message
        for hint, pattern, color in HIGHLIGHTS:
            if hint in message:
                message = pattern.sub(f"{color}\\1{RESET}", message)
        return message

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created)
        timestamp = f"{created:%H:%M:%S}.{int(record.msecs):03d} {created:%m/%d}"
        level = record.levelname
        sep = self._paint("|", DIM)

        line = " ".join(
            [
                self._paint(timestamp, DIM),
                sep,
                self._paint(f"{level:<8}", LEVEL_COLORS.get(level, COLORS["white"])),
                sep,
                self._component(record.name),
                sep,
                self._highlight(record.getMessage()),
            ]
        )
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class MCPRequestFormatter(ColorfulFormatter):
    """ColorfulFormatter with a leading marker for lifecycle events."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        if not self.use_colors:
            return base

        message = record.getMessage().lower()
        for keywords, color, marker in MARKERS:
            if any(keyword in message for keyword in keywords):
                return f"{color}{marker:<3}{RESET} {base}"
        return f"    {base}"
