"""A repository working copy inside a workspace.

The declaration and lock files live in the working copy's ``.repolock/``
sub-directory when it exists, otherwise at the working-copy root. The
location is recomputed on every access because a checkout can add or remove
that directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from repolock.core.declaration import DependencyDeclaration, read_declaration
from repolock.core.lockfile import Lockfile
from repolock.core.refs import RepositoryName

if TYPE_CHECKING:
    from repolock.core.workspace.workspace import Workspace


class Repository:
    """A named working copy in a ``Workspace``.

    Nothing is cached: the declaration is re-read on every call since a
    checkout may have changed it.
    """

    def __init__(self, workspace: Workspace, name: RepositoryName) -> None:
        self._workspace = workspace
        self._name = name

    @property
    def workspace(self) -> Workspace:
        """Workspace the repository is in."""
        return self._workspace

    @property
    def name(self) -> RepositoryName:
        """Name of the repository, also its directory name."""
        return self._name

    @property
    def path(self) -> Path:
        """Absolute path to the working copy root."""
        return self._workspace.root / self._name.value

    # -- File locations -----------------------------------------------------

    @property
    def config_dir(self) -> Path:
        """Directory that does (or should) hold the declaration and lock files."""
        candidate = self.path / self._workspace.settings.config_dir_name
        return candidate if candidate.is_dir() else self.path

    @property
    def declaration_path(self) -> Path:
        return self.config_dir / self._workspace.settings.declaration_name

    @property
    def lock_path(self) -> Path:
        return self.config_dir / self._workspace.settings.lock_name

    # -- Declaration --------------------------------------------------------

    def has_declaration(self) -> bool:
        return self.declaration_path.is_file()

    def read_declaration(self) -> DependencyDeclaration:
        """Read the declaration file; an absent file declares nothing.

        Raises:
            FileParseError: If the file is malformed.
        """
        settings = self._workspace.settings
        return read_declaration(
            self.declaration_path,
            default_branch=settings.default_branch,
            program_prefix=settings.program_prefix,
        )

    # -- Lock file ----------------------------------------------------------

    def has_lock(self) -> bool:
        return self.lock_path.is_file()

    def read_lock(self) -> Lockfile:
        """Read the lock file.

        Raises:
            LockfileError: If there is no lock file.
            FileParseError: If the lock file is malformed.
        """
        return Lockfile.read(self.lock_path)

    def write_lock(self, lockfile: Lockfile) -> None:
        """Replace the lock file; an empty lockfile deletes it."""
        lockfile.write(self.lock_path)

    def __repr__(self) -> str:
        return f"Repository({self._name.value!r}, {str(self.path)!r})"
