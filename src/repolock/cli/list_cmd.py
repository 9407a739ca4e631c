"""``repolock list`` - Show the current repository's locked dependencies."""

from __future__ import annotations

import click

from repolock.cli.context import AppContext, pass_app
from repolock.cli.output import console, lock_table, print_json


@click.command("list")
@click.option(
    "--format", "fmt",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format.",
)
@pass_app
def list_command(app: AppContext, fmt: str) -> None:
    """List locked dependencies in lock order."""
    repository = app.current_repository()
    lockfile = repository.read_lock() if repository.has_lock() else None

    if fmt == "json":
        entries = [] if lockfile is None else [
            {
                "name": str(entry.name),
                "url": entry.url.value,
                "specifier": entry.specifier.value,
                "revision_id": entry.revision_id.value,
            }
            for entry in lockfile
        ]
        print_json(entries)
        return

    if lockfile is None:
        console.print("[dim]No dependencies locked.[/dim]")
        return
    console.print(lock_table(lockfile, title=f"{repository.name} dependencies"))
