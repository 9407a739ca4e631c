"""Shared fixtures for CLI tests.

Commands run against the in-memory ``fake_vcs`` passed in through the click
context object, with the user's config file and environment isolated.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import pytest
from click.testing import CliRunner, Result

from repolock.cli.main import cli


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in [name for name in os.environ if name.startswith("REPOLOCK_")]:
        monkeypatch.delenv(var)


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def run(runner: CliRunner, fake_vcs) -> Callable[..., Result]:
    """Invoke ``repolock -C <directory> <args...>`` with the fake VCS."""

    def _run(directory: Path, *args: str) -> Result:
        return runner.invoke(cli, ["-C", str(directory), *args], obj={"vcs": fake_vcs})

    return _run


@pytest.fixture
def app_root(fake_vcs, clone_root):
    """A root repository depending on a and b, where a wants c#v1 and b wants c#v2."""
    c = fake_vcs.remote("c")
    c.commit("c1", tags=("v1",))
    c.commit("c2", tags=("v2",))
    fake_vcs.remote("a").commit("a1", f"{fake_vcs.url('c', 'v1')}\n")
    fake_vcs.remote("b").commit("b1", f"{fake_vcs.url('c', 'v2')}\n")
    fake_vcs.remote("app").commit("r1", f"{fake_vcs.url('a')}\n{fake_vcs.url('b')}\n")
    return clone_root("app")
