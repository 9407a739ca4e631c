"""Tests for the ``repolock`` group: version, help, and error reporting."""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from repolock import __version__
from repolock.cli.main import cli
from repolock.core.resolution import DependencyResolver


class TestVersionAndHelp:

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert f"repolock, version {__version__}" in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("update", "restore", "install", "list", "help"):
            assert command in result.output

    def test_help_command(self, run, workspace_root: Path) -> None:
        result = run(workspace_root, "help")
        assert result.exit_code == 0
        assert "Commands:" in result.output

    def test_help_for_subcommand(self, run, workspace_root: Path) -> None:
        result = run(workspace_root, "help", "restore")
        assert result.exit_code == 0
        assert "--exact" in result.output

    def test_help_for_unknown_command(self, run, workspace_root: Path) -> None:
        result = run(workspace_root, "help", "frobnicate")
        assert result.exit_code == 2
        assert "No such command 'frobnicate'" in result.output


class TestErrorReporting:

    def test_outside_repository(self, run, workspace_root: Path) -> None:
        """User errors print a one-line message and exit 1."""
        result = run(workspace_root, "update")
        assert result.exit_code == 1
        assert "Error: " in result.output
        assert "is not inside a repository working copy" in result.output
        assert "Traceback" not in result.output

    def test_config_error(self, run, workspace_root: Path, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.setenv("REPOLOCK_CONFIG", str(tmp_path / "missing.yaml"))
        result = run(workspace_root, "list")
        assert result.exit_code == 1
        assert "Error: Config file not found" in result.output

    def test_invalid_default_branch(self, run, app_root, monkeypatch) -> None:
        """A bad default branch is blamed on the settings, not a declaration file."""
        monkeypatch.setenv("REPOLOCK_DEFAULT_BRANCH", "my branch")
        result = run(app_root.path, "update")
        assert result.exit_code == 1
        assert "Error: Invalid settings in the environment" in result.output
        assert "default_branch" in result.output
        assert "Invalid dependency URL" not in result.output

    def test_internal_error(self, run, app_root, monkeypatch) -> None:
        """Unexpected exceptions are reported as internal errors, exit 1."""

        def broken(self, repository, on_visited=None):
            raise RuntimeError("kaboom")

        monkeypatch.setattr(DependencyResolver, "update", broken)
        result = run(app_root.path, "update")
        assert result.exit_code == 1
        assert "An internal error occurred" in result.output
        assert "kaboom" in result.output

    def test_missing_directory(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["-C", str(tmp_path / "nope"), "list"])
        assert result.exit_code == 2
