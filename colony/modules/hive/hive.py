"""
Configuration handles handed to the evaluation layer.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from colony.modules.hive.flake import Flake, FlakeResolver


class HivePathKind(str, Enum):
    """Where the hive definition comes from."""

    LEGACY = "legacy"
    FLAKE = "flake"


@dataclass(frozen=True)
class HivePath:
    """Either a hive.nix file on disk or a resolved flake."""

    kind: HivePathKind
    path: Optional[Path] = None
    flake: Optional[Flake] = None

    @classmethod
    def legacy(cls, path: Union[str, Path]) -> "HivePath":
        return cls(kind=HivePathKind.LEGACY, path=Path(path))

    @classmethod
    def from_flake(cls, flake: Flake) -> "HivePath":
        return cls(kind=HivePathKind.FLAKE, flake=flake)

    @classmethod
    async def from_path(cls, path: Union[str, Path], resolver: FlakeResolver) -> "HivePath":
        """
        Build a HivePath from a file path.

        A file named flake.nix is resolved as the flake in its directory;
        anything else is a legacy hive expression. Existence is left for the
        evaluation layer to report.
        """
        path = Path(path)
        if path.name == "flake.nix":
            flake = await resolver.from_dir(path.parent)
            return cls.from_flake(flake)
        return cls.legacy(path)

    @property
    def is_flake(self) -> bool:
        return self.kind == HivePathKind.FLAKE

    @property
    def context_dir(self) -> Optional[Path]:
        """Directory relative paths in the configuration are resolved against."""
        if self.is_flake:
            return self.flake.local_dir
        return self.path.parent

    def __str__(self) -> str:
        if self.is_flake:
            return self.flake.uri
        return str(self.path)


class Hive:
    """Handle to a hive configuration for one invocation."""

    def __init__(self, path: HivePath, show_trace: bool = False):
        self.path = path
        self._show_trace = show_trace

    @property
    def show_trace(self) -> bool:
        return self._show_trace

    def set_show_trace(self, value: bool) -> None:
        """Enable or disable --show-trace for nix commands."""
        self._show_trace = value

    def nix_options(self) -> List[str]:
        """Extra options to pass to every nix invocation for this hive."""
        options = []
        if self._show_trace:
            options.append("--show-trace")
        return options

    def __repr__(self) -> str:
        return f"Hive({self.path.kind.value}: {self.path}, show_trace={self._show_trace})"
