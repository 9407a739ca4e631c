"""Fixtures that build real Git repositories on disk."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable

import pytest


def _git(cwd: Path, *args: str) -> str:
    completed = subprocess.run(
        ["git", "-c", "user.email=dev@example.com", "-c", "user.name=Dev", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return completed.stdout.strip()


class GitRemote:
    """A source repository that tests clone from."""

    def __init__(self, path: Path) -> None:
        self.path = path
        path.mkdir(parents=True)
        _git(path, "init", "--quiet")
        _git(path, "symbolic-ref", "HEAD", "refs/heads/master")

    @property
    def url(self) -> str:
        return self.path.as_uri()

    def commit(self, message: str, files: dict[str, str] | None = None) -> str:
        """Commit ``files`` (or a marker file) on the current branch; return the hash."""
        for name, content in (files or {message: message}).items():
            (self.path / name).write_text(content)
        _git(self.path, "add", "--all")
        _git(self.path, "commit", "--quiet", "-m", message)
        return _git(self.path, "rev-parse", "HEAD")

    def tag(self, name: str) -> None:
        _git(self.path, "tag", name)

    def branch(self, name: str) -> None:
        _git(self.path, "checkout", "--quiet", "-b", name)

    def switch(self, name: str) -> None:
        _git(self.path, "checkout", "--quiet", name)


@pytest.fixture
def make_remote(tmp_path: Path) -> Callable[[str], GitRemote]:
    """Factory for source repositories under ``tmp_path/remotes``."""

    def _make(name: str) -> GitRemote:
        return GitRemote(tmp_path / "remotes" / name)

    return _make


@pytest.fixture
def git_workspace(tmp_path: Path) -> Path:
    root = tmp_path / "workspace"
    root.mkdir()
    return root.resolve()
