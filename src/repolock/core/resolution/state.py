"""Per-invocation traversal state for the update algorithm."""

from __future__ import annotations

from dataclasses import dataclass, field

from repolock.core.refs import HEAD, RepositoryName, RevisionSpecifier


@dataclass
class TraversalState:
    """Which repositories have been checked out, and to what.

    Attributes:
        checked_out: Repository name -> the specifier first assigned to it.
        visited: Names of repositories whose dependencies have been, or are
            queued to be, expanded.
    """

    checked_out: dict[RepositoryName, RevisionSpecifier] = field(default_factory=dict)
    visited: set[RepositoryName] = field(default_factory=set)

    @classmethod
    def for_root(cls, root: RepositoryName) -> TraversalState:
        """Start a traversal with the root pinned to whatever it has at HEAD."""
        state = cls()
        state.record_checkout(root, HEAD)
        return state

    def specifier_for(self, name: RepositoryName) -> RevisionSpecifier | None:
        """Return the specifier already in effect for ``name``, or None."""
        return self.checked_out.get(name)

    def is_visited(self, name: RepositoryName) -> bool:
        return name in self.visited

    def record_checkout(self, name: RepositoryName, specifier: RevisionSpecifier) -> None:
        """Record the first checkout of ``name`` and mark it visited."""
        self.checked_out[name] = specifier
        self.visited.add(name)
