"""Dependency resolution engine: update and restore.

Update walks the declared dependency graph breadth-first from a root
repository. The first time a repository is reached it is cloned if needed,
checked out to the requested specifier, and pinned to the exact revision
that specifier produced. Later requests for a different specifier are
reported as warnings and ignored, so the requirement closest to the root
wins. The pins are written to the root's lock file.

Restore replays a lock file, bringing each working copy to its pinned
revision according to the decision table in ``restore``.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from repolock.core.declaration import Dependency
from repolock.core.lockfile import LockDependency, Lockfile
from repolock.core.refs import HEAD, RepositoryName, RevisionSpecifier
from repolock.core.resolution.reporter import LoggingReporter, Reporter
from repolock.core.resolution.restore import (
    RestoreAction,
    RestoreOutcome,
    RestoreResult,
    decide_restore_action,
)
from repolock.core.resolution.state import TraversalState
from repolock.core.workspace import Repository, Workspace
from repolock.exceptions import (
    FileParseError,
    LockfileError,
    UncommittedChangesError,
    VcsError,
)

logger = logging.getLogger(__name__)

VisitCallback = Callable[[LockDependency, Repository], None]


# ---------------------------------------------------------------------------
# UpdateResult: what an update produced
# ---------------------------------------------------------------------------


@dataclass
class UpdateResult:
    """Result of updating a repository's dependencies.

    Attributes:
        lockfile: The newly written lock entries, in discovery order.
        warnings: Version conflict messages, in the order they were found.
        changes: ``Lockfile.diff`` of the previous lock against the new one.
    """

    lockfile: Lockfile
    warnings: list[str] = field(default_factory=list)
    changes: dict[str, Any] = field(default_factory=dict)

    @property
    def has_changes(self) -> bool:
        return any(self.changes.get(key) for key in ("added", "removed", "changed"))


# ---------------------------------------------------------------------------
# DependencyResolver
# ---------------------------------------------------------------------------


class DependencyResolver:
    """Resolve, check out and pin the dependencies of repositories in a workspace.

    Args:
        workspace: Workspace holding the root repository and its dependencies.
        reporter: Receives progress and warning messages. Defaults to a
            ``LoggingReporter``.
    """

    def __init__(self, workspace: Workspace, reporter: Reporter | None = None) -> None:
        self._workspace = workspace
        self._vcs = workspace.vcs
        self._reporter: Reporter = reporter or LoggingReporter()

    # -- Update -------------------------------------------------------------

    def update(
        self, repository: Repository, on_visited: VisitCallback | None = None
    ) -> UpdateResult:
        """Check out every transitive dependency and write a new lock file.

        Args:
            repository: The root repository. Its own working copy is left
                as it is.
            on_visited: Called once per dependency, right after it has been
                checked out and pinned.

        Returns:
            The new lock entries, conflict warnings, and the change against
            the previous lock file.

        Raises:
            UserError: On a malformed declaration, a VCS failure, or
                uncommitted changes blocking a checkout. The previous lock
                file is left untouched.
        """
        previous = self._previous_lock(repository)
        state = TraversalState.for_root(repository.name)
        locked = Lockfile()
        warnings: list[str] = []

        queue: deque[tuple[Sequence[Dependency], Repository]] = deque()
        queue.append((repository.read_declaration().dependencies, repository))

        while queue:
            dependencies, required_by = queue.popleft()
            self._clone_missing(dependencies, state)

            newly_visited: list[Repository] = []
            for dependency in dependencies:
                current = state.specifier_for(dependency.name)
                if current is None:
                    entry, checked_out = self._check_out(dependency, state)
                    locked.add(entry)
                    if on_visited is not None:
                        on_visited(entry, checked_out)
                    newly_visited.append(checked_out)
                elif current != dependency.specifier:
                    message = (
                        f"{required_by.name} depends on "
                        f"{dependency.name}#{dependency.specifier} "
                        f"but #{current} has already been checked out"
                    )
                    self._reporter.warning(message)
                    warnings.append(message)

            for visited in newly_visited:
                queue.append((visited.read_declaration().dependencies, visited))

        repository.write_lock(locked)
        logger.debug("Wrote %d lock entries to %s", len(locked), repository.lock_path)
        return UpdateResult(
            lockfile=locked,
            warnings=warnings,
            changes=previous.diff(locked),
        )

    def _previous_lock(self, repository: Repository) -> Lockfile:
        if not repository.has_lock():
            return Lockfile()
        try:
            return repository.read_lock()
        except FileParseError as exc:
            self._reporter.warning(f"Ignoring unreadable lock file: {exc}")
            return Lockfile()

    def _clone_missing(
        self, dependencies: Sequence[Dependency], state: TraversalState
    ) -> None:
        for dependency in dependencies:
            if state.is_visited(dependency.name):
                continue
            if self._workspace.find_repository(dependency.name) is not None:
                continue
            with self._reporter.step(f"Cloning {dependency.url}"):
                self._vcs.clone(self._workspace.root, dependency.url)

    def _check_out(
        self, dependency: Dependency, state: TraversalState
    ) -> tuple[LockDependency, Repository]:
        repository = self._workspace.get_repository(dependency.name)
        with self._reporter.step(
            f"Checking out {repository.name} to {dependency.specifier}"
        ):
            self._vcs.checkout(repository.path, dependency.specifier)
        state.record_checkout(dependency.name, dependency.specifier)

        revision_id = self._vcs.resolve(repository.path, HEAD)
        if revision_id is None:
            raise VcsError(f"Cannot resolve HEAD of {repository.name} after checkout")
        entry = LockDependency(dependency.url, dependency.specifier, revision_id)
        return entry, repository

    # -- Restore ------------------------------------------------------------

    def restore(
        self,
        repository: Repository,
        exact: bool = False,
        on_visited: VisitCallback | None = None,
    ) -> RestoreResult:
        """Bring every locked dependency back to its pinned revision.

        Args:
            repository: The root repository whose lock file is replayed.
            exact: Strict mode. Every working copy must be clean and end up
                exactly at its locked revision. Loose mode leaves working
                copies that are already at, or past, the locked revision
                alone, even with uncommitted changes.
            on_visited: Called once per lock entry after it has been handled.

        Returns:
            One outcome per lock entry, in lock order.

        Raises:
            LockfileError: If the repository has no lock file, or the lock
                file fails validation.
            UncommittedChangesError: If local changes block a checkout.
            UserError: On a malformed lock file or a VCS failure.
        """
        lockfile = repository.read_lock()
        problems = lockfile.validate(root=repository.name)
        if problems:
            raise LockfileError(
                f"Invalid lock file {repository.lock_path}: {'; '.join(problems)}"
            )
        result = RestoreResult()
        for entry in lockfile:
            with self._reporter.step(
                f"Restoring {entry.name} to {entry.specifier} ({entry.revision_id})"
            ):
                target = self._workspace.find_repository(entry.name)
                if target is None:
                    with self._reporter.step(f"Cloning {entry.url}"):
                        self._vcs.clone(self._workspace.root, entry.url)
                    target = self._workspace.get_repository(entry.name)
                outcome = self._restore_entry(target, entry, strict=exact)
                self._reporter.info(outcome.message)
            result.outcomes.append(outcome)
            if on_visited is not None:
                on_visited(entry, target)
        return result

    def _restore_entry(
        self, repository: Repository, entry: LockDependency, strict: bool
    ) -> RestoreOutcome:
        path = repository.path
        locked = entry.revision_id
        head = self._vcs.resolve(path, HEAD)
        is_dirty = self._vcs.has_uncommitted_changes(path)

        action = decide_restore_action(
            strict=strict,
            is_exact=head == locked,
            is_descendant=head is not None and self._vcs.is_ancestor(path, locked, head),
            is_dirty=is_dirty,
            specifier_matches=self._vcs.resolve(path, entry.specifier) == locked,
        )

        if action is RestoreAction.BLOCKED:
            raise UncommittedChangesError(repository.name.value)
        if action is RestoreAction.CHECKOUT_SPECIFIER:
            self._checkout(repository, entry.specifier)
        elif action is RestoreAction.CHECKOUT_REVISION_ID:
            self._checkout(repository, locked.as_specifier())
        return RestoreOutcome(repository.name, action, dirty=is_dirty)

    def _checkout(self, repository: Repository, revision: RevisionSpecifier) -> None:
        with self._reporter.step(f"Checking out {repository.name} to {revision}"):
            self._vcs.checkout(repository.path, revision)

    # -- Queries ------------------------------------------------------------

    def list_dependencies(self, repository: Repository) -> list[RepositoryName]:
        """Names of the repository's locked dependencies, in lock order.

        Empty when the repository has no lock file.
        """
        if not repository.has_lock():
            return []
        return repository.read_lock().names
