"""Dependency declarations: what each repository says it requires."""

from repolock.core.declaration.models import Dependency, DependencyDeclaration
from repolock.core.declaration.parser import (
    parse_declaration,
    parse_dependency_url,
    read_declaration,
)

__all__ = [
    "Dependency",
    "DependencyDeclaration",
    "parse_declaration",
    "parse_dependency_url",
    "read_declaration",
]
