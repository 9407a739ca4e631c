"""Tests for the LockDependency data model."""

from __future__ import annotations

import dataclasses

import pytest

from repolock.core.declaration import Dependency
from repolock.core.lockfile import LockDependency
from repolock.core.refs import ExactRevisionId, RepositoryName, RepositoryUrl, RevisionSpecifier


class TestLockDependency:
    """LockDependency extends Dependency with the exact revision."""

    def test_is_a_dependency(self, make_entry) -> None:
        """A lock entry can be used wherever a Dependency is expected."""
        entry = make_entry("lib")
        assert isinstance(entry, Dependency)
        assert entry.name == RepositoryName("lib")

    def test_as_line_has_three_tokens(self, make_entry) -> None:
        """as_line renders URL, specifier and revision id, space separated."""
        entry = make_entry("lib", "v1.0", "abc123")
        assert entry.as_line() == "https://example.com/git/lib.git v1.0 abc123"

    def test_str_uses_fragment_form(self, make_entry) -> None:
        """str() shows the dependency the way a declaration would write it."""
        entry = make_entry("lib", "v1.0", "abc123")
        assert str(entry) == "https://example.com/git/lib.git#v1.0"

    def test_frozen(self, make_entry) -> None:
        """Entries are immutable."""
        entry = make_entry()
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.revision_id = ExactRevisionId("other")  # type: ignore[misc]

    def test_equality_includes_revision(self) -> None:
        """Two entries differing only in revision id are not equal."""
        url = RepositoryUrl("https://example.com/lib.git")
        spec = RevisionSpecifier("master")
        assert LockDependency(url, spec, ExactRevisionId("a1")) != LockDependency(
            url, spec, ExactRevisionId("b2")
        )
