"""Shared fixtures for resolution engine tests."""

from __future__ import annotations

import pytest

from repolock.core.resolution import DependencyResolver, RecordingReporter
from repolock.core.workspace import Repository, Workspace


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def resolver(workspace: Workspace, reporter: RecordingReporter) -> DependencyResolver:
    """A resolver over the fake workspace that records what it reports."""
    return DependencyResolver(workspace, reporter)


@pytest.fixture
def locked_root(fake_vcs, clone_root, resolver: DependencyResolver) -> Repository:
    """A root repository whose dependencies have been updated and locked.

    Graph::

        root -> a (master = a1, history a0 <- a1)
        root -> b#v1 (v1 = b1, master = b2, history b1 <- b2)
    """
    a = fake_vcs.remote("a")
    a.commit("a0")
    a.commit("a1")
    b = fake_vcs.remote("b")
    b.commit("b1", tags=("v1",))
    b.commit("b2")
    fake_vcs.remote("root").commit(
        "r1", f"{fake_vcs.url('a')}\n{fake_vcs.url('b', 'v1')}\n"
    )
    root = clone_root("root")
    resolver.update(root)
    fake_vcs.calls.clear()
    return root
