"""``repolock restore`` - Check dependencies out at their locked revisions.

Exit Codes:
    0 - Every dependency is at (or, in loose mode, past) its locked revision.
    1 - No lock file, uncommitted changes, or a VCS failure.
"""

from __future__ import annotations

import click

from repolock.cli.context import AppContext, pass_app
from repolock.cli.output import print_restore_summary
from repolock.core.resolution import RestoreResult
from repolock.core.workspace import Repository
from repolock.exceptions import LockfileError


def restore_repository(app: AppContext, repository: Repository, exact: bool) -> RestoreResult:
    """Restore ``repository``'s dependencies, requiring a lock file.

    Raises:
        LockfileError: If the repository has no lock file.
    """
    if not repository.has_lock():
        raise LockfileError(
            f"No {app.settings.lock_name} file present, "
            "run 'repolock update' to create it"
        )
    return app.resolver(repository).restore(repository, exact=exact)


@click.command("restore")
@click.option(
    "--exact",
    is_flag=True,
    default=False,
    help="Require every dependency to be clean and exactly at its locked revision.",
)
@pass_app
def restore_command(app: AppContext, exact: bool) -> None:
    """Restore dependencies to the revisions recorded in the lock file.

    By default a dependency that is already at, or ahead of, its locked
    revision is left alone. With --exact every dependency is checked out
    to exactly its locked revision, and uncommitted changes are an error.
    """
    repository = app.current_repository()
    print_restore_summary(restore_repository(app, repository, exact))
