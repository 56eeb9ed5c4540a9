"""
Hive Module - Black Box Interface

Purpose: Find and describe the hive/flake configuration for an invocation
Interface: hive_from_args(), find_hive_file(), Hive, HivePath, Flake, NixFlakeResolver
Hidden: Directory traversal, path normalization, nix flake metadata parsing

The configuration language itself is evaluated elsewhere.
"""

from .flake import Flake, FlakeMetadata, FlakeResolver, NixFlakeResolver
from .hive import Hive, HivePath, HivePathKind
from .locator import HIVE_FILENAMES, canonicalize_cli_path, find_hive_file, hive_from_args

__all__ = [
    "Flake",
    "FlakeMetadata",
    "FlakeResolver",
    "HIVE_FILENAMES",
    "Hive",
    "HivePath",
    "HivePathKind",
    "NixFlakeResolver",
    "canonicalize_cli_path",
    "find_hive_file",
    "hive_from_args",
]
