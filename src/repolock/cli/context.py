"""Shared state for ``repolock`` subcommands.

The group callback in ``main`` builds one ``AppContext`` per invocation and
stores it as the click context object. Subcommands receive it through
``pass_app``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import click

from repolock.config import Settings
from repolock.core.resolution import DependencyResolver
from repolock.core.workspace import Repository, locate_repository
from repolock.exceptions import RepositoryNotFoundError
from repolock.vcs import GitClient, VcsClient


@dataclass
class AppContext:
    """Working directory, settings and VCS client for one CLI invocation."""

    directory: Path
    settings: Settings
    vcs: VcsClient = field(default_factory=GitClient)

    def current_repository(self) -> Repository:
        """Return the repository containing the working directory.

        Raises:
            RepositoryNotFoundError: If the directory is not inside a
                working copy.
        """
        repository = locate_repository(self.directory, self.vcs, self.settings)
        if repository is None:
            raise RepositoryNotFoundError(
                f"{self.directory} is not inside a repository working copy"
            )
        return repository

    def resolver(self, repository: Repository) -> DependencyResolver:
        return DependencyResolver(repository.workspace)


pass_app = click.make_pass_decorator(AppContext)
