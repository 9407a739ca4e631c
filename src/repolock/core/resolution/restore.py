"""Restore decisions: what to do with a working copy given its lock entry.

The decision is a pure function of five observations about the working
copy, evaluated in a fixed precedence order:

====================================  =================================
Condition                             Action
====================================  =================================
strict and dirty                      BLOCKED
loose and at the locked revision      ALREADY_CHECKED_OUT
loose and at a descendant             ALREADY_AT_DESCENDANT
dirty                                 BLOCKED
at the locked revision                ALREADY_CHECKED_OUT
specifier names the locked revision   CHECKOUT_SPECIFIER
otherwise                             CHECKOUT_REVISION_ID
====================================  =================================

Loose mode accepts a dirty working copy that is already at, or past, the
locked revision. That leniency lets a developer keep working on a dependency
while restoring its siblings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from repolock.core.refs import RepositoryName


class RestoreAction(Enum):
    """Outcome of the restore decision table."""

    BLOCKED = "blocked"
    ALREADY_CHECKED_OUT = "already-checked-out"
    ALREADY_AT_DESCENDANT = "already-at-descendant"
    CHECKOUT_SPECIFIER = "checkout-specifier"
    CHECKOUT_REVISION_ID = "checkout-revision-id"

    @property
    def checks_out(self) -> bool:
        return self in (RestoreAction.CHECKOUT_SPECIFIER, RestoreAction.CHECKOUT_REVISION_ID)


def decide_restore_action(
    *,
    strict: bool,
    is_exact: bool,
    is_descendant: bool,
    is_dirty: bool,
    specifier_matches: bool,
) -> RestoreAction:
    """Apply the restore decision table.

    Args:
        strict: True for exact restores, False for loose ones.
        is_exact: The working copy HEAD is the locked revision.
        is_descendant: The locked revision is an ancestor of HEAD.
        is_dirty: The working copy has uncommitted changes.
        specifier_matches: The locked specifier currently names the locked
            revision.
    """
    if strict and is_dirty:
        return RestoreAction.BLOCKED
    if not strict and is_exact:
        return RestoreAction.ALREADY_CHECKED_OUT
    if not strict and is_descendant:
        return RestoreAction.ALREADY_AT_DESCENDANT
    if is_dirty:
        return RestoreAction.BLOCKED
    if is_exact:
        return RestoreAction.ALREADY_CHECKED_OUT
    if specifier_matches:
        return RestoreAction.CHECKOUT_SPECIFIER
    return RestoreAction.CHECKOUT_REVISION_ID


@dataclass(frozen=True)
class RestoreOutcome:
    """What restore did to one repository."""

    name: RepositoryName
    action: RestoreAction
    dirty: bool = False

    @property
    def message(self) -> str:
        suffix = " with uncommitted changes" if self.dirty else ""
        if self.action is RestoreAction.ALREADY_CHECKED_OUT:
            return f"Already checked out{suffix}"
        if self.action is RestoreAction.ALREADY_AT_DESCENDANT:
            return f"Already checked out to descendant{suffix}"
        if self.action is RestoreAction.CHECKOUT_SPECIFIER:
            return "Checked out by specifier"
        if self.action is RestoreAction.CHECKOUT_REVISION_ID:
            return "Checked out by revision id"
        return "Uncommitted changes"


@dataclass
class RestoreResult:
    """Result of restoring a repository's dependencies from its lock file.

    Attributes:
        outcomes: One outcome per lock entry, in lock order.
    """

    outcomes: list[RestoreOutcome] = field(default_factory=list)

    @property
    def checked_out(self) -> list[RepositoryName]:
        """Repositories that restore had to check out."""
        return [o.name for o in self.outcomes if o.action.checks_out]
