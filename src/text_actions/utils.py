# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
Utility functions for Text Actions.

Includes console logging, the injectable logger, and small string helpers.
"""

from abc import ABC, abstractmethod
from datetime import datetime

# Console colors
C_RESET = "\033[0m"
C_BOLD = "\033[1m"
C_DIM = "\033[2m"
C_RED = "\033[91m"
C_GREEN = "\033[92m"
C_YELLOW = "\033[93m"
C_CYAN = "\033[96m"

# Log level styles
LOG_STYLES = {
    "INFO": (C_DIM, "›"),
    "OK": (C_GREEN, "✓"),
    "WARN": (C_YELLOW, "⚠"),
    "ERR": (C_RED, "✗"),
    "DEBUG": (C_DIM, "·"),
}

# Timeout values (seconds)
SERVICE_CHECK_TIMEOUT = 5

# Display truncation
LOG_TRUNCATE = 60


def log(msg: str, level: str = "INFO", file=None):
    """Print a timestamped, colored log message."""
    ts = datetime.now().strftime("%H:%M:%S")
    color, sym = LOG_STYLES.get(level, (C_DIM, "›"))
    print(f"  {C_DIM}{ts}{C_RESET}  {color}{sym}{C_RESET}  {msg}", file=file)


def truncate(text: str, length: int = LOG_TRUNCATE) -> str:
    """Truncate text with ellipsis if too long."""
    if len(text) > length:
        return text[:length] + "..."
    return text


def is_blank(value) -> bool:
    """True for None, empty, or whitespace-only strings."""
    return value is None or not str(value).strip()


# ─────────────────────────────────────────────────────────────────
# Injectable loggers
# ─────────────────────────────────────────────────────────────────

class Logger(ABC):
    """Observational logging sink handed to services. Never drives control flow."""

    @abstractmethod
    def info(self, msg: str) -> None:
        ...

    @abstractmethod
    def debug(self, msg: str) -> None:
        ...

    @abstractmethod
    def warn(self, msg: str) -> None:
        ...

    @abstractmethod
    def error(self, msg: str) -> None:
        ...

    def ok(self, msg: str) -> None:
        """Success line. Defaults to info for sinks without a distinct style."""
        self.info(msg)


class ConsoleLogger(Logger):
    """Logger that prints through log(). DEBUG lines only when enabled."""

    def __init__(self, debug: bool = False, file=None):
        self._debug = debug
        self._file = file  # None = stdout

    def info(self, msg: str) -> None:
        log(msg, "INFO", self._file)

    def debug(self, msg: str) -> None:
        if self._debug:
            log(msg, "DEBUG", self._file)

    def warn(self, msg: str) -> None:
        log(msg, "WARN", self._file)

    def error(self, msg: str) -> None:
        log(msg, "ERR", self._file)

    def ok(self, msg: str) -> None:
        log(msg, "OK", self._file)


class NullLogger(Logger):
    """Discards everything."""

    def info(self, msg: str) -> None:
        pass

    def debug(self, msg: str) -> None:
        pass

    def warn(self, msg: str) -> None:
        pass

    def error(self, msg: str) -> None:
        pass
