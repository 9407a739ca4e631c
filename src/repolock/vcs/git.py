"""Git implementation of the version-control interface.

Shells out to the ``git`` executable. Every command runs with a time limit;
a command that exceeds it raises ``VcsTimeoutError``.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from repolock.core.refs import ExactRevisionId, RepositoryUrl, RevisionSpecifier
from repolock.exceptions import (
    UncommittedChangesError,
    VcsCommandError,
    VcsError,
    VcsTimeoutError,
)
from repolock.vcs.base import VcsClient

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: float = 300.0


class GitClient(VcsClient):
    """Version-control client backed by the ``git`` command line tool.

    Args:
        executable: Name or path of the git binary.
        timeout: Upper bound in seconds on any single git command.
    """

    def __init__(self, executable: str = "git", timeout: float = DEFAULT_TIMEOUT) -> None:
        self._executable = executable
        self._timeout = timeout

    def clone(self, parent: Path, url: RepositoryUrl) -> Path:
        destination = parent / url.name.value
        self._run(["clone", "--quiet", url.value, str(destination)], cwd=parent)
        return destination

    def checkout(self, path: Path, revision: RevisionSpecifier) -> None:
        if self.has_uncommitted_changes(path):
            raise UncommittedChangesError(path.name)
        self._run(["checkout", "--quiet", revision.value, "--"], cwd=path)

    def resolve(self, path: Path, revision: RevisionSpecifier) -> ExactRevisionId | None:
        # Branches exist only as remote-tracking refs until first checked out.
        candidates = [revision.value]
        if revision.value != "HEAD":
            candidates.append(f"refs/remotes/origin/{revision.value}")
        for candidate in candidates:
            completed = self._run(
                ["rev-parse", "--verify", "--quiet", f"{candidate}^{{commit}}"],
                cwd=path,
                check=False,
            )
            if completed.returncode == 0:
                return ExactRevisionId(completed.stdout.strip())
            if completed.returncode != 1:
                raise self._failure(completed)
        return None

    def is_ancestor(
        self, path: Path, ancestor: ExactRevisionId, descendant: ExactRevisionId
    ) -> bool:
        for revision in (ancestor, descendant):
            if self.resolve(path, revision.as_specifier()) is None:
                return False
        completed = self._run(
            ["merge-base", "--is-ancestor", ancestor.value, descendant.value],
            cwd=path,
            check=False,
        )
        if completed.returncode == 0:
            return True
        if completed.returncode == 1:
            return False
        raise self._failure(completed)

    def has_uncommitted_changes(self, path: Path) -> bool:
        completed = self._run(
            ["status", "--porcelain", "--untracked-files=no"], cwd=path
        )
        return bool(completed.stdout.strip())

    def is_repository(self, path: Path) -> bool:
        if not (path / ".git").exists():
            return False
        top = self.find_containing_repository(path)
        return top is not None and top == path.resolve()

    def find_containing_repository(self, path: Path) -> Path | None:
        if not path.is_dir():
            return None
        completed = self._run(["rev-parse", "--show-toplevel"], cwd=path, check=False)
        if completed.returncode != 0:
            return None
        return Path(completed.stdout.strip()).resolve()

    # -- Process plumbing ---------------------------------------------------

    def _run(
        self, args: list[str], cwd: Path, check: bool = True
    ) -> subprocess.CompletedProcess[str]:
        argv = [self._executable, *args]
        logger.debug("Running %s in %s", " ".join(argv), cwd)
        try:
            completed = subprocess.run(
                argv,
                cwd=cwd,
                check=False,
                text=True,
                capture_output=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired:
            raise VcsTimeoutError(argv, self._timeout) from None
        except FileNotFoundError as exc:
            raise VcsError(f"Cannot run {self._executable!r}: {exc}") from exc
        if check and completed.returncode != 0:
            raise self._failure(completed)
        return completed

    @staticmethod
    def _failure(completed: subprocess.CompletedProcess[str]) -> VcsCommandError:
        output = "\n".join(
            part.strip() for part in (completed.stdout, completed.stderr) if part.strip()
        )
        return VcsCommandError(list(completed.args), completed.returncode, output)
