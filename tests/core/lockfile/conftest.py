"""Shared fixtures for lockfile tests."""

from __future__ import annotations

from typing import Callable

import pytest

from repolock.core.lockfile import LockDependency, Lockfile
from repolock.core.refs import ExactRevisionId, RepositoryUrl, RevisionSpecifier

EntryFactory = Callable[..., LockDependency]


@pytest.fixture
def make_entry() -> EntryFactory:
    """Factory for LockDependency instances with readable defaults."""

    def _make(
        name: str = "lib",
        specifier: str = "master",
        revision: str = "0d11b76bd7ff16a24c6390fb5f75017ba59eee42",
        host: str = "https://example.com/git",
    ) -> LockDependency:
        return LockDependency(
            RepositoryUrl(f"{host}/{name}.git"),
            RevisionSpecifier(specifier),
            ExactRevisionId(revision),
        )

    return _make


@pytest.fixture
def sample_lockfile(make_entry: EntryFactory) -> Lockfile:
    """A lockfile with three entries in a deliberate, non-sorted order."""
    return Lockfile([
        make_entry("zeta", "v2.0", "c0ffee"),
        make_entry("alpha", "master", "deadbeef"),
        make_entry("mid", "release/1.x", "abc123"),
    ])
