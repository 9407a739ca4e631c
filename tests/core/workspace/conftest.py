"""Shared fixtures for workspace tests."""

from __future__ import annotations

from typing import Callable

import pytest

from repolock.core.lockfile import LockDependency, Lockfile
from repolock.core.refs import ExactRevisionId, RepositoryUrl, RevisionSpecifier


@pytest.fixture
def make_lock() -> Callable[[], Lockfile]:
    """Factory for a small two-entry lockfile."""

    def _make() -> Lockfile:
        return Lockfile([
            LockDependency(
                RepositoryUrl("https://example.com/one.git"),
                RevisionSpecifier("master"),
                ExactRevisionId("1111"),
            ),
            LockDependency(
                RepositoryUrl("https://example.com/two.git"),
                RevisionSpecifier("v2"),
                ExactRevisionId("2222"),
            ),
        ])

    return _make
