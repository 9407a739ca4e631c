"""Workspaces and the repository working copies they contain."""

from repolock.core.workspace.repository import Repository
from repolock.core.workspace.workspace import Workspace, locate_repository

__all__ = ["Repository", "Workspace", "locate_repository"]
