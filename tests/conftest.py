"""
Shared pytest fixtures for Colony tests.

This module provides common fixtures including:
- python_command: Build real commands that run a short Python script
- FakeFlakeResolver: Stand-in for the nix flake metadata resolver
- Sample node registries for selector tests
"""

import os
import sys
import textwrap
from pathlib import Path
from typing import List, Tuple, Union

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from colony.errors import FlakeResolutionError
from colony.modules.executor import Command
from colony.modules.hive import Flake
from colony.modules.nodes import NodeConfig


# =============================================================================
# Command Infrastructure
# =============================================================================

@pytest.fixture
def python_command():
    """
    Factory for commands that run a Python snippet in a fresh interpreter.

    Usage:
        def test_something(python_command):
            command = python_command("print('hello')")
    """

    def factory(script: str, **kwargs) -> Command:
        return Command(sys.executable, ["-c", textwrap.dedent(script)], **kwargs)

    return factory


# =============================================================================
# Flake Resolution
# =============================================================================

class FakeFlakeResolver:
    """
    Resolver that answers without running nix.

    Records every call so tests can assert which path was taken.
    """

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: List[Tuple[str, str]] = []

    async def from_uri(self, uri: str) -> Flake:
        self.calls.append(("uri", uri))
        if self.fail:
            raise FlakeResolutionError(uri, "resolution disabled in test")
        return Flake(uri=f"resolved+{uri}")

    async def from_dir(self, path: Union[str, Path]) -> Flake:
        self.calls.append(("dir", str(path)))
        if self.fail:
            raise FlakeResolutionError(str(path), "resolution disabled in test")
        return Flake(uri=f"path:{path}", local_dir=Path(path))


@pytest.fixture
def flake_resolver():
    """A FakeFlakeResolver that always succeeds."""
    return FakeFlakeResolver()


@pytest.fixture
def isolated_search(tmp_path, monkeypatch):
    """
    Hide hive files outside tmp_path from the upward search.

    Keeps "not found" tests independent of whatever exists above the
    temporary directory on the machine running them.
    """
    original = Path.is_file

    def is_file(self):
        if self.name in ("flake.nix", "hive.nix") and tmp_path not in self.parents:
            return False
        return original(self)

    monkeypatch.setattr(Path, "is_file", is_file)


# =============================================================================
# Node Registries
# =============================================================================

@pytest.fixture
def registry():
    """A small mixed registry of edge and core nodes."""
    return {
        "edge-1": NodeConfig(tags={"edge", "prod"}),
        "edge-2": NodeConfig(tags={"edge", "staging"}),
        "core-1": NodeConfig(tags={"core", "prod"}),
        "core-db": NodeConfig(tags={"core", "db-primary"}),
        "laptop": NodeConfig(),
    }


@pytest.fixture
def hosts_registry():
    """Three plain hosts without tags."""
    return {
        "host1": NodeConfig(),
        "host2": NodeConfig(),
        "host3": NodeConfig(),
    }


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "subprocess: Tests that spawn real child processes"
    )
    config.addinivalue_line(
        "markers", "posix: Tests relying on POSIX signals"
    )
