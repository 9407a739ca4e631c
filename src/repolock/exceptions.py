"""repolock exception hierarchy.

All public exceptions inherit from RepolockError, giving callers a single
base class to catch when they want to handle any repolock-specific failure
without swallowing unrelated errors.

``UserError`` marks the expected, user-facing failures. The CLI reports them
as a terse message. Any other exception reaching the CLI is treated as an
internal error and reported with a full traceback.
"""

from __future__ import annotations

from pathlib import Path


class RepolockError(Exception):
    """Base exception for all repolock errors."""


class UserError(RepolockError):
    """An expected failure whose message is meant for the user."""

    def user_messages(self) -> list[str]:
        """Return this error's message followed by its user-facing causes.

        Walks the ``__cause__`` chain and stops at the first cause that is
        not itself a ``UserError``.
        """
        messages: list[str] = []
        current: BaseException | None = self
        while isinstance(current, UserError):
            messages.append(str(current))
            current = current.__cause__
        return messages


class FileParseError(UserError):
    """Raised when a declaration or lock file contains a malformed line.

    Always carries the 1-based line number and the raw line text. The file
    path is attached by whoever knows it, via ``with_path``.
    """

    def __init__(
        self,
        message: str,
        line_number: int,
        line: str,
        path: Path | None = None,
    ) -> None:
        self.message = message
        self.line_number = line_number
        self.line = line
        self.path = path
        super().__init__(self._format())

    def _format(self) -> str:
        location = str(self.path) if self.path is not None else "<input>"
        return (
            f"{location}:{self.line_number}: {self.message}: {self.line!r}"
        )

    def with_path(self, path: Path) -> FileParseError:
        """Attach the file path and refresh the message."""
        self.path = path
        self.args = (self._format(),)
        return self

    def __str__(self) -> str:
        return self._format()


class LockfileError(UserError):
    """Raised for lock file misuse: missing file, duplicate entries."""


class ConfigError(UserError):
    """Raised when the configuration file or environment is invalid."""


class RepositoryNotFoundError(UserError):
    """Raised when a repository is required but absent from the workspace.

    After a clone this indicates a cloning or naming inconsistency.
    """


class UncommittedChangesError(UserError):
    """Raised when uncommitted changes in a working copy block a checkout."""

    def __init__(self, repository: str) -> None:
        self.repository = repository
        super().__init__(f"Uncommitted changes in {repository}")


class VcsError(UserError):
    """Base class for failures of the underlying version-control tool."""


class VcsCommandError(VcsError):
    """Raised when a version-control command exits non-zero.

    Carries the command line and the tool's combined output.
    """

    def __init__(self, argv: list[str], returncode: int, output: str) -> None:
        self.argv = argv
        self.returncode = returncode
        self.output = output
        detail = f"\n{output.strip()}" if output.strip() else ""
        super().__init__(
            f"Command failed with exit code {returncode}: "
            f"{' '.join(argv)}{detail}"
        )


class VcsTimeoutError(VcsError):
    """Raised when a version-control command exceeds its time limit."""

    def __init__(self, argv: list[str], timeout: float) -> None:
        self.argv = argv
        self.timeout = timeout
        super().__init__(
            f"Command timed out after {timeout:g}s: {' '.join(argv)}"
        )


class ImporterError(UserError):
    """Raised when the external solution importer cannot be run or fails."""
