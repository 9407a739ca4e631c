"""Version-control clients."""

from repolock.vcs.base import VcsClient
from repolock.vcs.git import GitClient

__all__ = ["GitClient", "VcsClient"]
