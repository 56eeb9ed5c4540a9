"""
Error kinds raised by the Colony core.

Every failure the core can surface derives from ColonyError so the calling
layer can catch them in one place and decide what to do.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from colony.modules.executor.execution import ExecutionResult


class ColonyError(Exception):
    """Base class for all Colony errors."""


class CommandSpawnError(ColonyError):
    """The process could not be started at all (missing executable, permissions)."""

    def __init__(self, program: str, reason: Optional[str] = None):
        self.program = program
        message = f"Failed to spawn {program!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class CommandFailedError(ColonyError):
    """The process ran but terminated unsuccessfully."""

    def __init__(self, result: "ExecutionResult"):
        self.result = result
        super().__init__(f"Command failed with {result.status}")

    @property
    def status(self):
        return self.result.status

    @property
    def stdout(self) -> str:
        return self.result.stdout

    @property
    def stderr(self) -> str:
        return self.result.stderr


class SelectorError(ColonyError, ValueError):
    """A node selector expression could not be compiled."""

    def __init__(self, expression: str, reason: str):
        self.expression = expression
        self.reason = reason
        super().__init__(f"Invalid node selector {expression!r}: {reason}")


class ConfigNotFoundError(ColonyError):
    """No hive.nix or flake.nix exists in the search path."""

    def __init__(self, start: Path):
        self.start = start
        super().__init__(
            f"Could not find `hive.nix` or `flake.nix` in {str(start)!r} or any parent directory"
        )


class FlakeResolutionError(ColonyError):
    """A flake reference could not be resolved."""

    def __init__(self, reference: str, reason: str):
        self.reference = reference
        self.reason = reason
        super().__init__(f"Failed to resolve flake {reference!r}: {reason}")
