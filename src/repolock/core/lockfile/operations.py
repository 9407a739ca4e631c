"""Lockfile operations --- parsing, reading, validation, and diffing.

This module extends the ``Lockfile`` class (defined in ``lockfile.py``) with
classmethods and instance methods for:

- **Deserialization:** ``from_lines``, ``read`` (disk).
- **Validation:** consistency checks on a parsed lockfile.
- **Diffing:** structured comparison of two lockfiles.

These are attached to the ``Lockfile`` class at import time (in
``__init__.py``) to keep each source file focused while presenting a single
unified API to callers.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from repolock.core.lockfile.models import LockDependency
from repolock.core.refs import ExactRevisionId, RepositoryName, RepositoryUrl, RevisionSpecifier
from repolock.exceptions import FileParseError, LockfileError

_FULL_HASH_RE = re.compile(r"^[0-9a-f]{40}$")


def _parse_line(line_number: int, raw: str) -> LockDependency | None:
    """Parse one lock file line; None for blank and comment lines."""
    line = raw.strip()
    if not line or line.startswith("#"):
        return None

    tokens = line.split()
    if len(tokens) != 3:
        raise FileParseError(
            "Expected URL, revision specifier, and revision id", line_number, raw
        )
    url_text, specifier_text, revision_text = tokens

    try:
        url, _ = RepositoryUrl.parse(url_text)
    except ValueError as exc:
        raise FileParseError(f"Expected valid Git URL ({exc})", line_number, raw) from exc

    try:
        specifier = RevisionSpecifier(specifier_text)
    except ValueError as exc:
        raise FileParseError(
            f"Expected valid revision specifier ({exc})", line_number, raw
        ) from exc

    try:
        revision_id = ExactRevisionId(revision_text)
    except ValueError as exc:
        raise FileParseError(
            f"Expected valid revision id ({exc})", line_number, raw
        ) from exc

    return LockDependency(url, specifier, revision_id)


def _from_lines(cls: type, lines: Iterable[str]) -> Any:
    """Parse lock file lines into a new ``Lockfile``.

    Raises:
        FileParseError: On a malformed line, or a second entry for a
            repository that already has one. The error carries no path.
    """
    lf = cls()
    for line_number, raw in enumerate(lines, start=1):
        raw = raw.rstrip("\r\n")
        entry = _parse_line(line_number, raw)
        if entry is None:
            continue
        try:
            lf.add(entry)
        except LockfileError as exc:
            raise FileParseError(str(exc), line_number, raw) from exc
    return lf


def _read(cls: type, path: Path) -> Any:
    """Read a lockfile from disk.

    Raises:
        LockfileError: If the file does not exist.
        FileParseError: On malformed content, citing ``path``.
    """
    if not path.is_file():
        raise LockfileError(f"No lock file at {path}")
    text = path.read_text(encoding="utf-8")
    try:
        return cls.from_lines(text.splitlines())
    except FileParseError as exc:
        raise exc.with_path(path)


def _validate(self: Any, root: RepositoryName | None = None) -> list[str]:
    """Validate the lockfile for internal consistency.

    Performs the following checks:

    1. **No self-pin:** ``root``, the repository that owns the lock file,
       must not appear as one of its own entries.
    2. **Hash specifiers:** An entry whose specifier is a full commit hash
       must be pinned to that same commit.

    Args:
        root: Name of the repository the lock file belongs to, if known.

    Returns:
        List of validation error messages. Empty means the lockfile is
        valid.
    """
    errors: list[str] = []

    if root is not None and self.get(root) is not None:
        errors.append(f"Repository {root} is locked as a dependency of itself")

    for entry in self._entries:
        specifier = entry.specifier.value.lower()
        if _FULL_HASH_RE.match(specifier) and specifier != entry.revision_id.value.lower():
            errors.append(
                f"Repository {entry.name} is pinned to {entry.revision_id} "
                f"but its specifier names commit {entry.specifier}"
            )

    return errors


def _diff(self: Any, other: Any) -> dict[str, Any]:
    """Compare two lockfiles and return differences.

    - **added**: Repositories present in ``other`` but not in ``self``.
    - **removed**: Repositories present in ``self`` but not in ``other``.
    - **changed**: Repositories present in both whose URL, specifier, or
      revision id differ.

    Args:
        other: The lockfile to compare against (typically the newer one).

    Returns:
        Dict with keys 'added', 'removed', 'changed'. Names are strings in
        the order they appear in the relevant lockfile.
    """
    added = [str(n) for n in other.names if self.get(n) is None]
    removed = [str(n) for n in self.names if other.get(n) is None]

    changes: list[dict[str, Any]] = []
    for old in self._entries:
        new = other.get(old.name)
        if new is None:
            continue
        for field_name, old_value, new_value in (
            ("url", old.url.value, new.url.value),
            ("specifier", old.specifier.value, new.specifier.value),
            ("revision_id", old.revision_id.value, new.revision_id.value),
        ):
            if old_value != new_value:
                changes.append({
                    "name": str(old.name),
                    "field": field_name,
                    "old": old_value,
                    "new": new_value,
                })

    return {
        "added": added,
        "removed": removed,
        "changed": changes,
    }
