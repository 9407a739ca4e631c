"""Repository references: names, URLs, revision specifiers and exact ids.

These are immutable value types. Each validates its input on construction
and raises ``ValueError`` with a short reason when the text is malformed;
parsers turn that into a ``FileParseError`` that cites the offending line.

Conversion to text is explicit: use ``.value`` (or ``str()``).
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass, field
from urllib.parse import urlsplit

_NAME_RE = re.compile(r"^[A-Za-z0-9_.-]+$")
_REVISION_RE = re.compile(r"^[A-Za-z0-9_./-]+$")

# Schemes accepted by ``git clone``/``git fetch`` in URL form.
GIT_SCHEMES = frozenset({"file", "ssh", "git", "http", "https"})


@dataclass(frozen=True, eq=False)
class RepositoryName:
    """The short name of a repository, also its workspace directory name.

    Case-insensitive: ``RepositoryName("Foo") == RepositoryName("foo")``.
    The original spelling is kept in ``value``.
    """

    value: str
    _key: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not _NAME_RE.match(self.value):
            raise ValueError(f"Invalid repository name {self.value!r}")
        object.__setattr__(self, "_key", self.value.casefold())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RepositoryName):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __str__(self) -> str:
        return self.value


def _check_revision(text: str, kind: str) -> None:
    if not text:
        raise ValueError(f"Empty {kind}")
    if any(ch.isspace() for ch in text):
        raise ValueError(f"{kind.capitalize()} {text!r} contains whitespace")
    if not _REVISION_RE.match(text):
        raise ValueError(f"{kind.capitalize()} {text!r} contains invalid characters")


@dataclass(frozen=True)
class RevisionSpecifier:
    """A branch, tag or hash that may point at different revisions over time."""

    value: str

    def __post_init__(self) -> None:
        _check_revision(self.value, "revision specifier")

    def __str__(self) -> str:
        return self.value


HEAD = RevisionSpecifier("HEAD")


@dataclass(frozen=True)
class ExactRevisionId:
    """An immutable identifier for exactly one revision (a commit hash)."""

    value: str

    def __post_init__(self) -> None:
        _check_revision(self.value, "revision id")

    def as_specifier(self) -> RevisionSpecifier:
        """Return the id as a specifier, for checking it out directly."""
        return RevisionSpecifier(self.value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RepositoryUrl:
    """A fetchable repository location.

    ``value`` never includes a ``#fragment``; use ``parse`` to split one off.

    Attributes:
        value: The URL text, without fragment.
        name: The final path segment minus its extension.
    """

    value: str
    name: RepositoryName = field(init=False, compare=False)

    def __post_init__(self) -> None:
        parts = urlsplit(self.value)
        if parts.scheme.lower() not in GIT_SCHEMES:
            raise ValueError(f"Invalid Git URL scheme in {self.value!r}")
        if parts.query:
            raise ValueError("Query components are not permitted in Git URLs")
        if parts.fragment or "#" in self.value:
            raise ValueError("Fragments are not permitted in a repository URL")
        segment = posixpath.basename(parts.path.rstrip("/"))
        stem, _ = posixpath.splitext(segment)
        if not stem:
            raise ValueError(f"No repository name in {self.value!r}")
        object.__setattr__(self, "name", RepositoryName(stem))

    @classmethod
    def parse(cls, text: str) -> tuple[RepositoryUrl, RevisionSpecifier | None]:
        """Split ``text`` into a URL and the specifier in its fragment, if any.

        Raises:
            ValueError: If the URL or the fragment is malformed.
        """
        base, sep, fragment = text.strip().partition("#")
        url = cls(base)
        if not sep or not fragment.strip():
            return url, None
        try:
            return url, RevisionSpecifier(fragment.strip())
        except ValueError as exc:
            raise ValueError(f"URL fragment is not a valid revision specifier: {exc}") from exc

    def with_fragment(self, specifier: RevisionSpecifier) -> str:
        """Render the URL with ``specifier`` as its fragment."""
        return f"{self.value}#{specifier.value}"

    def __str__(self) -> str:
        return self.value
