"""Lockfile core class --- entry management and serialization.

The ``Lockfile`` class is the in-memory form of a ``.repolock.lock`` file:
an ordered list of ``LockDependency`` entries, one per repository, in the
breadth-first order the update traversal discovered them.

File format, one entry per line::

    <url> <revision-specifier> <exact-revision-id>

Ordering is significant and preserved exactly: restoring replays entries in
file order. Writing an empty lockfile deletes the file, so the presence of a
lock file means "resolved at least one dependency".
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from repolock.core.lockfile.models import LockDependency
from repolock.core.refs import RepositoryName
from repolock.exceptions import LockfileError


class Lockfile:
    """Ordered, name-unique set of pinned dependencies.

    Example::

        lf = Lockfile()
        lf.add(LockDependency(url, RevisionSpecifier("v1"), ExactRevisionId("0d11b76")))
        lf.write(Path(".repolock.lock"))
    """

    def __init__(self, entries: Iterable[LockDependency] = ()) -> None:
        self._entries: list[LockDependency] = []
        self._by_name: dict[RepositoryName, LockDependency] = {}
        for entry in entries:
            self.add(entry)

    # -- Entry management ---------------------------------------------------

    def add(self, entry: LockDependency) -> None:
        """Append an entry.

        Raises:
            LockfileError: If the repository already has an entry.
        """
        if entry.name in self._by_name:
            raise LockfileError(f"Repository {entry.name} is already locked")
        self._entries.append(entry)
        self._by_name[entry.name] = entry

    def get(self, name: RepositoryName) -> LockDependency | None:
        """Return the entry for ``name``, or None."""
        return self._by_name.get(name)

    @property
    def entries(self) -> list[LockDependency]:
        """Entries in lock order."""
        return list(self._entries)

    @property
    def names(self) -> list[RepositoryName]:
        """Repository names in lock order."""
        return [entry.name for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LockDependency]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Lockfile):
            return NotImplemented
        return self._entries == other._entries

    # -- Serialization ------------------------------------------------------

    def to_lines(self) -> list[str]:
        """Serialize to lock file lines, in lock order."""
        return [entry.as_line() for entry in self._entries]

    def to_text(self) -> str:
        """Serialize to lock file text, newline-terminated."""
        return "".join(f"{line}\n" for line in self.to_lines())

    def write(self, path: Path) -> None:
        """Write to ``path``, or delete ``path`` if there are no entries."""
        if not self._entries:
            path.unlink(missing_ok=True)
            return
        path.write_text(self.to_text(), encoding="utf-8")
