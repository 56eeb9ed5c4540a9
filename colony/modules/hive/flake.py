"""
Flake reference resolution through the nix CLI.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol, Union

from pydantic import BaseModel, ValidationError

from colony.errors import CommandFailedError, FlakeResolutionError
from colony.modules.executor import Command, CommandExecution
from colony.modules.progress import NullProgress, ProgressSink

logger = logging.getLogger("colony.hive.flake")

NIX_FLAKE_FEATURES = ["--extra-experimental-features", "nix-command flakes"]


@dataclass(frozen=True)
class Flake:
    """A resolved flake reference."""

    uri: str
    local_dir: Optional[Path] = None


class FlakeMetadata(BaseModel):
    """The subset of ``nix flake metadata --json`` output we rely on."""

    url: str
    path: Optional[str] = None


class FlakeResolver(Protocol):
    """Protocol for flake reference resolvers."""

    async def from_uri(self, uri: str) -> Flake:
        """Resolve a flake URI such as ``github:owner/repo``."""
        ...

    async def from_dir(self, path: Union[str, Path]) -> Flake:
        """Resolve the flake rooted at a local directory."""
        ...


class NixFlakeResolver:
    """Resolve flakes with ``nix flake metadata``."""

    def __init__(
        self,
        nix_bin: str = "nix",
        progress: Optional[ProgressSink] = None,
        extra_options: Optional[List[str]] = None,
    ):
        self.nix_bin = nix_bin
        self.progress = progress or NullProgress()
        self.extra_options = list(extra_options or [])

    def _command(self, reference: str) -> Command:
        return Command(
            self.nix_bin,
            ["flake", "metadata", "--json", *NIX_FLAKE_FEATURES, *self.extra_options, reference],
        )

    async def from_uri(self, uri: str) -> Flake:
        """
        Resolve a flake URI.

        Raises:
            FlakeResolutionError: If nix fails or prints unexpected metadata
            CommandSpawnError: If nix itself cannot be started
        """
        execution = CommandExecution(self._command(uri), self.progress.clone())

        try:
            result = await execution.run()
        except CommandFailedError as e:
            detail = e.stderr.strip().splitlines()
            reason = detail[-1] if detail else f"nix exited with {e.status}"
            raise FlakeResolutionError(uri, reason) from e

        try:
            metadata = FlakeMetadata.model_validate_json(result.stdout)
        except ValidationError as e:
            raise FlakeResolutionError(uri, f"unexpected metadata output: {e}") from e

        local_dir = Path(metadata.path) if metadata.path else None
        logger.info(f"Resolved flake {uri} to {metadata.url}")
        return Flake(uri=metadata.url, local_dir=local_dir)

    async def from_dir(self, path: Union[str, Path]) -> Flake:
        """Resolve the flake in a local directory."""
        return await self.from_uri(str(Path(path).resolve()))
