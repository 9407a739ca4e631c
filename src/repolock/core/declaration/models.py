"""Declaration data models: Dependency and DependencyDeclaration.

Pure data holders with no I/O, safe to import from anywhere in the package.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from repolock.core.refs import RepositoryName, RepositoryUrl, RevisionSpecifier


@dataclass(frozen=True)
class Dependency:
    """A required repository plus the revision it is required at.

    Attributes:
        url: Where to clone the repository from.
        specifier: Branch, tag or hash to check out.
    """

    url: RepositoryUrl
    specifier: RevisionSpecifier

    @property
    def name(self) -> RepositoryName:
        """The workspace name of the required repository."""
        return self.url.name

    def __str__(self) -> str:
        return self.url.with_fragment(self.specifier)


@dataclass(frozen=True)
class DependencyDeclaration:
    """Contents of a repository's declaration file.

    Attributes:
        dependencies: Required repositories, in declaration order.
        programs: Program paths declared for wrapper generation. The
            resolution engine ignores them.
    """

    dependencies: tuple[Dependency, ...] = field(default_factory=tuple)
    programs: tuple[str, ...] = field(default_factory=tuple)
