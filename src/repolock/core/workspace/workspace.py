"""A root directory that contains repository working copies.

The workspace is a flat namespace: the working copy for repository ``foo``
always lives at ``<root>/foo``. Names compare case-insensitively, so a
lookup for ``Foo`` finds a directory called ``foo``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from repolock.config import Settings
from repolock.core.refs import RepositoryName
from repolock.core.workspace.repository import Repository
from repolock.exceptions import RepositoryNotFoundError
from repolock.vcs.base import VcsClient

logger = logging.getLogger(__name__)


class Workspace:
    """A directory of sibling repository working copies.

    Args:
        root: Path to the workspace's root directory. Must exist.
        vcs: Client used to recognise working copies.
        settings: File naming and parsing settings.

    Raises:
        NotADirectoryError: If ``root`` is not a directory.
    """

    def __init__(self, root: Path, vcs: VcsClient, settings: Settings | None = None) -> None:
        if not root.is_dir():
            raise NotADirectoryError(f"Workspace root is not a directory: {root}")
        self._root = root.resolve()
        self._vcs = vcs
        self._settings = settings or Settings()

    @property
    def root(self) -> Path:
        """Absolute path to the workspace root."""
        return self._root

    @property
    def vcs(self) -> VcsClient:
        return self._vcs

    @property
    def settings(self) -> Settings:
        return self._settings

    def find_repository(self, name: RepositoryName) -> Repository | None:
        """Return the working copy named ``name``, or None if there is none."""
        exact = self._root / name.value
        if exact.is_dir():
            return Repository(self, name) if self._vcs.is_repository(exact) else None

        for child in self._root.iterdir():
            if child.name.casefold() != name.value.casefold():
                continue
            if child.is_dir() and self._vcs.is_repository(child):
                return Repository(self, RepositoryName(child.name))
        return None

    def get_repository(self, name: RepositoryName) -> Repository:
        """Return the working copy named ``name``.

        Raises:
            RepositoryNotFoundError: If no such working copy exists.
        """
        repository = self.find_repository(name)
        if repository is None:
            raise RepositoryNotFoundError(
                f"No repository named '{name}' in workspace {self._root}"
            )
        return repository

    def repositories(self) -> list[Repository]:
        """All working copies in the workspace, sorted by name.

        Re-read from disk on each call.
        """
        found: list[Repository] = []
        for child in sorted(self._root.iterdir(), key=lambda p: p.name.casefold()):
            if not child.is_dir():
                continue
            try:
                name = RepositoryName(child.name)
            except ValueError:
                logger.debug("Skipping %s: not a valid repository name", child)
                continue
            if self._vcs.is_repository(child):
                found.append(Repository(self, name))
        return found


def locate_repository(
    path: Path, vcs: VcsClient, settings: Settings | None = None
) -> Repository | None:
    """Find the repository containing ``path``.

    The workspace is the parent directory of the enclosing working copy.

    Returns:
        The containing ``Repository``, or None if ``path`` is not inside a
        working copy.
    """
    top = vcs.find_containing_repository(path)
    if top is None:
        return None
    try:
        name = RepositoryName(top.name)
    except ValueError:
        logger.debug("Working copy %s does not have a valid repository name", top)
        return None
    return Workspace(top.parent, vcs, settings).find_repository(name)
