"""Shared fixtures for repolock tests.

``fake_vcs`` is an in-memory version-control client. Remote repositories
are built commit by commit in the test; each commit carries the text of the
declaration file it contains (or None for no declaration). Cloning and
checking out write that text into the working copy on disk, so the real
``Workspace`` and declaration parser run unchanged against it.
"""

from __future__ import annotations

import pathlib
from dataclasses import dataclass, field
from typing import Callable

import pytest

from repolock.core.refs import ExactRevisionId, RepositoryUrl, RevisionSpecifier
from repolock.core.workspace import Repository, Workspace
from repolock.exceptions import UncommittedChangesError, VcsCommandError
from repolock.vcs.base import VcsClient

DECLARATION_NAME = ".repolock"


@dataclass
class FakeRemote:
    """A remote repository: commits with parents, and named refs."""

    url: str
    commits: dict[str, tuple[str | None, str | None]] = field(default_factory=dict)
    refs: dict[str, str] = field(default_factory=dict)

    def commit(
        self,
        commit_id: str,
        declaration: str | None = None,
        branch: str = "master",
        tags: tuple[str, ...] = (),
    ) -> str:
        """Add a commit on top of ``branch`` and move the branch to it."""
        self.commits[commit_id] = (self.refs.get(branch), declaration)
        self.refs[branch] = commit_id
        for tag in tags:
            self.refs[tag] = commit_id
        return commit_id

    def lookup(self, revision: str) -> str | None:
        if revision in self.refs:
            return self.refs[revision]
        if revision in self.commits:
            return revision
        return None

    def ancestors(self, commit_id: str) -> list[str]:
        """``commit_id`` and every commit before it."""
        chain: list[str] = []
        current: str | None = commit_id
        while current is not None:
            chain.append(current)
            current = self.commits[current][0]
        return chain


@dataclass
class FakeWorkingCopy:
    remote: FakeRemote
    head: str
    dirty: bool = False


class FakeVcs(VcsClient):
    """In-memory ``VcsClient`` that records every mutating call."""

    def __init__(self) -> None:
        self.remotes: dict[str, FakeRemote] = {}
        self.copies: dict[pathlib.Path, FakeWorkingCopy] = {}
        self.calls: list[tuple[str, str, str]] = []

    # -- Test setup ---------------------------------------------------------

    def remote(self, name: str) -> FakeRemote:
        """Return the remote called ``name``, creating it if needed."""
        url = self.url(name)
        if url not in self.remotes:
            self.remotes[url] = FakeRemote(url)
        return self.remotes[url]

    @staticmethod
    def url(name: str, specifier: str | None = None) -> str:
        base = f"file:///remotes/{name}.git"
        return base if specifier is None else f"{base}#{specifier}"

    def working_copy(self, path: pathlib.Path) -> FakeWorkingCopy:
        return self.copies[path.resolve()]

    def head(self, path: pathlib.Path) -> str:
        return self.working_copy(path).head

    def make_dirty(self, path: pathlib.Path) -> None:
        self.working_copy(path).dirty = True

    def operations(self, kind: str) -> list[str]:
        """Repository names passed to ``kind`` calls, in call order."""
        return [name for op, name, _ in self.calls if op == kind]

    # -- VcsClient ----------------------------------------------------------

    def clone(self, parent: pathlib.Path, url: RepositoryUrl) -> pathlib.Path:
        self.calls.append(("clone", url.name.value, url.value))
        remote = self.remotes.get(url.value)
        destination = parent / url.name.value
        if remote is None or destination.exists():
            raise VcsCommandError(["git", "clone", url.value], 128, "fatal: cannot clone")
        destination.mkdir()
        copy = FakeWorkingCopy(remote, remote.refs["master"])
        self.copies[destination.resolve()] = copy
        self._sync(destination, copy)
        return destination

    def checkout(self, path: pathlib.Path, revision: RevisionSpecifier) -> None:
        self.calls.append(("checkout", path.name, revision.value))
        copy = self.working_copy(path)
        if copy.dirty:
            raise UncommittedChangesError(path.name)
        target = copy.remote.lookup(revision.value)
        if target is None:
            raise VcsCommandError(
                ["git", "checkout", revision.value], 1, "error: pathspec did not match"
            )
        copy.head = target
        self._sync(path, copy)

    def resolve(
        self, path: pathlib.Path, revision: RevisionSpecifier
    ) -> ExactRevisionId | None:
        copy = self.working_copy(path)
        if revision.value == "HEAD":
            return ExactRevisionId(copy.head)
        found = copy.remote.lookup(revision.value)
        return ExactRevisionId(found) if found is not None else None

    def is_ancestor(
        self,
        path: pathlib.Path,
        ancestor: ExactRevisionId,
        descendant: ExactRevisionId,
    ) -> bool:
        remote = self.working_copy(path).remote
        if ancestor.value not in remote.commits or descendant.value not in remote.commits:
            return False
        return ancestor.value in remote.ancestors(descendant.value)

    def has_uncommitted_changes(self, path: pathlib.Path) -> bool:
        return self.working_copy(path).dirty

    def is_repository(self, path: pathlib.Path) -> bool:
        return path.resolve() in self.copies

    def find_containing_repository(self, path: pathlib.Path) -> pathlib.Path | None:
        resolved = path.resolve()
        for candidate in (resolved, *resolved.parents):
            if candidate in self.copies:
                return candidate
        return None

    @staticmethod
    def _sync(path: pathlib.Path, copy: FakeWorkingCopy) -> None:
        declaration = copy.remote.commits[copy.head][1]
        target = path / DECLARATION_NAME
        if declaration is None:
            target.unlink(missing_ok=True)
        else:
            target.write_text(declaration, encoding="utf-8")


@pytest.fixture
def fake_vcs() -> FakeVcs:
    """An empty in-memory version-control client."""
    return FakeVcs()


@pytest.fixture
def workspace_root(tmp_path: pathlib.Path) -> pathlib.Path:
    """An empty workspace directory."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def workspace(workspace_root: pathlib.Path, fake_vcs: FakeVcs) -> Workspace:
    """A workspace backed by ``fake_vcs``."""
    return Workspace(workspace_root, fake_vcs)


@pytest.fixture
def clone_root(
    workspace: Workspace, fake_vcs: FakeVcs
) -> Callable[[str], Repository]:
    """Clone the named remote into the workspace and return it as a Repository."""

    def _clone(name: str) -> Repository:
        fake_vcs.clone(workspace.root, RepositoryUrl(fake_vcs.url(name)))
        fake_vcs.calls.clear()
        return workspace.get_repository(RepositoryUrl(fake_vcs.url(name)).name)

    return _clone


@pytest.fixture(scope="session")
def fake_vcs_class() -> type[FakeVcs]:
    """The fake client class, for tests that need a fresh instance per example."""
    return FakeVcs
