"""Parser for per-repository declaration files.

Line-oriented UTF-8 text, one directive per line::

    # comment
    program: tools/build.py
    https://example.com/path/to/lib.git
    https://example.com/path/to/other.git#v1.2
    file:///srv/git/pinned.git#0d11b76bd7ff16a24c6390fb5f75017ba59eee42

Blank lines and ``#`` comments are ignored. A dependency without a fragment
requires the default branch.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from repolock.core.declaration.models import Dependency, DependencyDeclaration
from repolock.core.refs import RepositoryUrl, RevisionSpecifier
from repolock.exceptions import FileParseError


def parse_dependency_url(text: str, default_branch: str) -> Dependency:
    """Parse one ``<url>[#<specifier>]`` string.

    Raises:
        ValueError: If the URL or its fragment is malformed.
    """
    url, specifier = RepositoryUrl.parse(text)
    return Dependency(url, specifier or RevisionSpecifier(default_branch))


def parse_declaration(
    lines: Iterable[str],
    default_branch: str = "master",
    program_prefix: str = "program:",
) -> DependencyDeclaration:
    """Parse declaration file lines.

    Args:
        lines: Raw lines, with or without trailing newlines.
        default_branch: Specifier for dependencies with no fragment.
        program_prefix: Marker for program directives.

    Returns:
        The parsed ``DependencyDeclaration``.

    Raises:
        FileParseError: On a malformed dependency URL or an empty program
            directive. The error has no path; callers attach it.
    """
    dependencies: list[Dependency] = []
    programs: list[str] = []

    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        stripped = line.strip()

        if not stripped or stripped.startswith("#"):
            continue

        if stripped.startswith(program_prefix):
            program = stripped[len(program_prefix):].strip()
            if not program:
                raise FileParseError("Expected a program path", line_number, line)
            programs.append(program)
            continue

        try:
            dependencies.append(parse_dependency_url(stripped, default_branch))
        except ValueError as exc:
            raise FileParseError(
                f"Invalid dependency URL ({exc})", line_number, line
            ) from exc

    return DependencyDeclaration(tuple(dependencies), tuple(programs))


def read_declaration(
    path: Path,
    default_branch: str = "master",
    program_prefix: str = "program:",
) -> DependencyDeclaration:
    """Read and parse a declaration file.

    A missing file declares nothing.
    """
    if not path.is_file():
        return DependencyDeclaration()
    text = path.read_text(encoding="utf-8")
    try:
        return parse_declaration(text.splitlines(), default_branch, program_prefix)
    except FileParseError as exc:
        raise exc.with_path(path)
