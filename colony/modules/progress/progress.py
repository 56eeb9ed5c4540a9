"""
Progress sinks for live command output.

A sink receives one line of child-process output at a time. The executor
hands a clone of the same sink to the stdout and stderr readers, so every
implementation here shares its underlying state and lock across clones and
tolerates calls from both readers.
"""

import logging
import threading
from typing import List, Optional, Protocol

from rich.console import Console
from rich.markup import escape


class ProgressSink(Protocol):
    """Protocol for live output consumers."""

    def log(self, line: str) -> None:
        """Record or display one line of output."""
        ...

    def clone(self) -> "ProgressSink":
        """Return a handle sharing this sink's destination."""
        ...


class NullProgress:
    """Sink that discards everything."""

    def log(self, line: str) -> None:
        pass

    def clone(self) -> "NullProgress":
        return self


class LoggingProgress:
    """Forward lines to a logger, prefixed with the task label."""

    def __init__(self, label: str, logger: Optional[logging.Logger] = None):
        self.label = label
        self.logger = logger or logging.getLogger("colony.progress")

    def log(self, line: str) -> None:
        self.logger.info("[%s] %s", self.label, line)

    def clone(self) -> "LoggingProgress":
        return LoggingProgress(self.label, self.logger)


class ConsoleProgress:
    """Print lines to a rich console as ``label | line``."""

    def __init__(
        self,
        label: str,
        console: Optional[Console] = None,
        style: str = "bold cyan",
        _lock: Optional[threading.Lock] = None,
    ):
        self.label = label
        self.console = console or Console(highlight=False)
        self.style = style
        self._lock = _lock or threading.Lock()

    def log(self, line: str) -> None:
        with self._lock:
            self.console.print(
                f"[{self.style}]{escape(self.label)}[/] | {escape(line)}",
                soft_wrap=True,
            )

    def clone(self) -> "ConsoleProgress":
        return ConsoleProgress(self.label, self.console, self.style, _lock=self._lock)


class BufferedProgress:
    """Collect lines in memory; clones append to the same list."""

    def __init__(self, lines: Optional[List[str]] = None, _lock: Optional[threading.Lock] = None):
        self.lines: List[str] = lines if lines is not None else []
        self._lock = _lock or threading.Lock()

    def log(self, line: str) -> None:
        with self._lock:
            self.lines.append(line)

    def clone(self) -> "BufferedProgress":
        return BufferedProgress(self.lines, _lock=self._lock)
