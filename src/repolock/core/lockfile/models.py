"""Lock file data model: LockDependency.

A pure data holder with no I/O, safe to import without circular-dependency
concerns.
"""

from __future__ import annotations

from dataclasses import dataclass

from repolock.core.declaration.models import Dependency
from repolock.core.refs import ExactRevisionId


@dataclass(frozen=True)
class LockDependency(Dependency):
    """A dependency pinned to the exact revision it resolved to.

    Attributes:
        url: Where the repository was cloned from.
        specifier: The specifier that was checked out during update.
        revision_id: The exact revision the specifier resolved to.
    """

    revision_id: ExactRevisionId

    def as_line(self) -> str:
        """Render the entry as one lock file line."""
        return f"{self.url.value} {self.specifier.value} {self.revision_id.value}"
