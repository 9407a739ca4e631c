"""``repolock install`` - Restore exactly, then run the configured importer.

The importer is an external command (``importer`` in the config file) that
receives the current repository's path followed by the path of every locked
dependency, in lock order.

Exit Codes:
    0 - Dependencies restored and imported.
    1 - No importer configured, restore failed, or the importer failed.
"""

from __future__ import annotations

import click

from repolock.cli.context import AppContext, pass_app
from repolock.cli.output import console, print_restore_summary
from repolock.cli.restore import restore_repository
from repolock.core.importer import NO_IMPORTER_MESSAGE, run_importer
from repolock.exceptions import ImporterError


@click.command("install")
@pass_app
def install_command(app: AppContext) -> None:
    """Restore dependencies exactly and import them into this repository."""
    if not app.settings.importer:
        raise ImporterError(NO_IMPORTER_MESSAGE)

    repository = app.current_repository()
    print_restore_summary(restore_repository(app, repository, exact=True))

    workspace = repository.workspace
    dependencies = [
        workspace.get_repository(name)
        for name in app.resolver(repository).list_dependencies(repository)
    ]
    run_importer(app.settings.importer, repository, dependencies)
    console.print(f"[green]Imported {len(dependencies)} dependencies.[/green]")
