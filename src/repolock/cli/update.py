"""``repolock update`` - Check out declared dependencies and rewrite the lock file.

Walks the declared dependency graph breadth-first from the current
repository, cloning and checking out each dependency at the revision the
nearest declaration asks for, and records the exact revisions in the lock
file.

Exit Codes:
    0 - Lock file written (version conflicts are reported as warnings).
    1 - Update failed; the previous lock file is left untouched.
"""

from __future__ import annotations

import click

from repolock.cli.context import AppContext, pass_app
from repolock.cli.output import print_update_summary


@click.command("update")
@pass_app
def update_command(app: AppContext) -> None:
    """Update dependencies to their declared revisions and lock them.

    Where two repositories ask for different revisions of the same
    dependency, the one closer to the current repository wins and the other
    is reported as a warning.
    """
    repository = app.current_repository()
    result = app.resolver(repository).update(repository)
    print_update_summary(result)
