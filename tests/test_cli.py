"""
Tests for the colony command line glue.
"""

import os
import sys

import pytest
import yaml
from click.testing import CliRunner

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from conftest import FakeFlakeResolver
from colony.cli import cli


@pytest.fixture(autouse=True)
def quiet_cli(monkeypatch):
    """Keep the CLI from reconfiguring logging or reading the host environment."""
    monkeypatch.setattr("colony.cli.configure_logging", lambda level: None)
    for name in ("COLONY_SHOW_TRACE", "COLONY_NIX_BIN", "COLONY_STREAM_LIMIT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def runner():
    return CliRunner()


class TestLocate:
    """Test `colony locate`."""

    def test_explicit_path(self, runner, tmp_path, monkeypatch):
        (tmp_path / "foo.nix").write_text("{}")
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli, ["-f", "foo.nix", "locate"])

        assert result.exit_code == 0, result.output
        assert result.output == "legacy: foo.nix\n"

    def test_implicit_search(self, runner, tmp_path, monkeypatch):
        (tmp_path / "hive.nix").write_text("{}")
        (tmp_path / "sub").mkdir()
        monkeypatch.chdir(tmp_path / "sub")

        result = runner.invoke(cli, ["--show-trace", "locate"])

        assert result.exit_code == 0, result.output
        assert "hive.nix" in result.output
        assert "show-trace: enabled" in result.output

    def test_show_trace_from_environment(self, runner, tmp_path, monkeypatch):
        (tmp_path / "hive.nix").write_text("{}")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("COLONY_SHOW_TRACE", "true")

        result = runner.invoke(cli, ["-f", "hive.nix", "locate"])

        assert "show-trace: enabled" in result.output

    def test_not_found(self, runner, tmp_path, monkeypatch, isolated_search):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli, ["locate"])

        assert result.exit_code == 1
        assert "Could not find `hive.nix` or `flake.nix`" in result.output

    def test_flake_uri(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        resolver = FakeFlakeResolver()
        monkeypatch.setattr("colony.cli.NixFlakeResolver", lambda nix_bin: resolver)

        result = runner.invoke(cli, ["-f", "github:owner/repo", "locate"])

        assert result.exit_code == 0, result.output
        assert result.output == "flake: resolved+github:owner/repo\n"
        assert resolver.calls == [("uri", "github:owner/repo")]


class TestNodes:
    """Test `colony nodes`."""

    @pytest.fixture
    def registry_file(self, tmp_path):
        path = tmp_path / "nodes.yaml"
        path.write_text(yaml.safe_dump({
            "edge-1": {"tags": ["edge", "prod"]},
            "edge-2": {"tags": ["edge", "staging"]},
            "core-1": {"tags": ["core", "prod"]},
        }))
        return str(path)

    def test_all_nodes_without_selector(self, runner, registry_file):
        result = runner.invoke(cli, ["nodes", "--registry", registry_file])

        assert result.exit_code == 0, result.output
        assert "3 of 3 nodes selected" in result.output

    def test_selector(self, runner, registry_file):
        result = runner.invoke(cli, ["nodes", "--registry", registry_file, "--on", "@prod"])

        assert result.exit_code == 0, result.output
        assert "2 of 3 nodes selected" in result.output
        assert "edge-1" in result.output
        assert "core-1" in result.output
        assert "edge-2" not in result.output

    def test_invalid_selector(self, runner, registry_file):
        result = runner.invoke(cli, ["nodes", "--registry", registry_file, "--on", "edge-1,,x"])

        assert result.exit_code == 1
        assert "Invalid node selector" in result.output


class TestRun:
    """Test `colony run`."""

    def test_success_streams_output(self, runner):
        result = runner.invoke(
            cli, ["run", "--label", "demo", "--", sys.executable, "-c", "print('hello')"]
        )

        assert result.exit_code == 0, result.output
        assert "demo | hello" in result.output

    def test_failure_reports_status_and_streams_stderr_once(self, runner):
        script = "import sys; print('boom', file=sys.stderr); sys.exit(3)"

        result = runner.invoke(cli, ["run", "--label", "demo", "--", sys.executable, "-c", script])

        assert result.exit_code == 1
        assert "Command failed with exit code 3" in result.output
        assert result.output.count("boom") == 1
        assert "demo | boom" in result.output

    def test_spawn_failure(self, runner, tmp_path):
        result = runner.invoke(cli, ["run", str(tmp_path / "missing-binary")])

        assert result.exit_code == 1
        assert "Failed to spawn" in result.output
