"""
Locate the hive configuration for an invocation.

Without an explicit --config, search upwards from the working directory for
flake.nix, then hive.nix. With one, treat it as a path unless no such file
exists and it looks like a flake URI.
"""

import logging
from pathlib import Path
from typing import Optional

from colony.errors import ConfigNotFoundError
from colony.modules.hive.flake import FlakeResolver, NixFlakeResolver
from colony.modules.hive.hive import Hive, HivePath

logger = logging.getLogger("colony.hive.locator")

# Checked in order at each directory level
HIVE_FILENAMES = ("flake.nix", "hive.nix")


def find_hive_file(start: Optional[Path] = None) -> Path:
    """
    Search upwards from start for a hive definition.

    Each directory is checked completely (flake.nix before hive.nix) before
    moving to its parent.

    Raises:
        ConfigNotFoundError: If the filesystem root is reached without a match
    """
    # A relative start would stop at Path(".") instead of the real root
    start = Path(start).absolute() if start is not None else Path.cwd()
    cur = start

    while True:
        for filename in HIVE_FILENAMES:
            candidate = cur / filename
            if candidate.is_file():
                logger.debug(f"Found hive definition at {candidate}")
                return candidate

        parent = cur.parent
        if parent == cur:
            break
        cur = parent

    logger.error(f"Could not find `hive.nix` or `flake.nix` in {str(start)!r} or any parent directory")
    raise ConfigNotFoundError(start)


def canonicalize_cli_path(path: str) -> str:
    """
    Prefix relative paths with ./ (absolute paths pass through).

    The prefix only matters for the string form; once the result is wrapped
    in a Path the location is the same relative path without it.
    """
    if not path.startswith("/"):
        return f"./{path}"
    return path


async def hive_from_args(
    config: str,
    explicit: bool,
    show_trace: bool = False,
    resolver: Optional[FlakeResolver] = None,
) -> Hive:
    """
    Resolve the --config argument into a Hive.

    Args:
        config: Value of --config (ignored unless explicit)
        explicit: Whether the user supplied --config
        show_trace: Applied to the resulting hive
        resolver: Flake resolver; defaults to the nix CLI

    Raises:
        ConfigNotFoundError: If no hive is found by the upward search
        FlakeResolutionError: If a flake reference cannot be resolved
    """
    resolver = resolver or NixFlakeResolver()

    if not explicit:
        path = find_hive_file()
    else:
        fpath = canonicalize_cli_path(config)

        if not Path(fpath).exists() and ":" in config:
            logger.debug(f"Treating {config!r} as a flake URI")
            flake = await resolver.from_uri(config)
            hive = Hive(HivePath.from_flake(flake))
            hive.set_show_trace(show_trace)
            return hive

        path = Path(fpath)

    hive_path = await HivePath.from_path(path, resolver)
    hive = Hive(hive_path)
    hive.set_show_trace(show_trace)

    return hive
