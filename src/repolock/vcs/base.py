"""Version-control interface consumed by the workspace and resolution engine.

Every method is a blocking call. Implementations must surface failures of
the underlying tool as ``VcsError`` subclasses so the CLI can report them as
user-facing errors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from repolock.core.refs import ExactRevisionId, RepositoryUrl, RevisionSpecifier


class VcsClient(ABC):
    """Abstract version-control client.

    Working copies are addressed by path. Revisions are passed as
    ``RevisionSpecifier``; an ``ExactRevisionId`` is converted with
    ``as_specifier()`` when it has to be checked out directly.
    """

    @abstractmethod
    def clone(self, parent: Path, url: RepositoryUrl) -> Path:
        """Clone ``url`` into ``parent / url.name`` and return that path."""

    @abstractmethod
    def checkout(self, path: Path, revision: RevisionSpecifier) -> None:
        """Check the working copy out to ``revision``.

        Raises:
            UncommittedChangesError: If the working copy has local changes.
            VcsError: If the tool fails, e.g. the revision does not exist.
        """

    @abstractmethod
    def resolve(self, path: Path, revision: RevisionSpecifier) -> ExactRevisionId | None:
        """Return the exact id ``revision`` currently names, or None if it names nothing."""

    @abstractmethod
    def is_ancestor(
        self, path: Path, ancestor: ExactRevisionId, descendant: ExactRevisionId
    ) -> bool:
        """Return True if ``ancestor`` is ``descendant`` or one of its ancestors.

        Unknown revisions are not ancestors of anything.
        """

    @abstractmethod
    def has_uncommitted_changes(self, path: Path) -> bool:
        """Return True if tracked files have staged or unstaged changes."""

    @abstractmethod
    def is_repository(self, path: Path) -> bool:
        """Return True if ``path`` is the root of a working copy."""

    @abstractmethod
    def find_containing_repository(self, path: Path) -> Path | None:
        """Return the root of the working copy containing ``path``, or None."""
