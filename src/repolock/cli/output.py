"""Rich output formatting helpers for the repolock CLI.

Results go to standard output through ``console``. Errors go to standard
error through ``err_console``; progress messages reach standard error via
the logging handler installed in ``main``.
"""

from __future__ import annotations

import json
from typing import Any

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from repolock.core.lockfile import Lockfile
from repolock.core.resolution import RestoreAction, RestoreResult, UpdateResult

_ACTION_STYLES: dict[RestoreAction, str] = {
    RestoreAction.ALREADY_CHECKED_OUT: "green",
    RestoreAction.ALREADY_AT_DESCENDANT: "cyan",
    RestoreAction.CHECKOUT_SPECIFIER: "yellow",
    RestoreAction.CHECKOUT_REVISION_ID: "yellow",
    RestoreAction.BLOCKED: "bold red",
}

console = Console()
err_console = Console(stderr=True)


def lock_table(lockfile: Lockfile, title: str = "Locked dependencies") -> Table:
    """Build a table with one row per lock entry, in lock order."""
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Repository", style="bold")
    table.add_column("Specifier")
    table.add_column("Revision", style="cyan")
    table.add_column("URL", style="dim")
    for index, entry in enumerate(lockfile, start=1):
        table.add_row(
            str(index),
            str(entry.name),
            entry.specifier.value,
            entry.revision_id.value,
            entry.url.value,
        )
    return table


def print_update_summary(result: UpdateResult) -> None:
    """Print the new lock entries, conflict warnings and lock changes.

    Args:
        result: The result returned by ``DependencyResolver.update``.
    """
    if len(result.lockfile) == 0:
        console.print("[dim]No dependencies declared; lock file removed.[/dim]")
    else:
        console.print(lock_table(result.lockfile))

    if result.warnings:
        console.print(f"[yellow]{len(result.warnings)} version conflict(s):[/yellow]")
        for warning in result.warnings:
            console.print(Text(f"  - {warning}", style="yellow"))

    print_changes(result.changes)


def print_changes(changes: dict[str, Any]) -> None:
    """Print a ``Lockfile.diff`` result, or a note that nothing changed."""
    added = changes.get("added", [])
    removed = changes.get("removed", [])
    changed = changes.get("changed", [])
    if not (added or removed or changed):
        console.print("[dim]Lock file unchanged.[/dim]")
        return

    for name in added:
        console.print(Text.assemble(("  + ", "green"), (name, "bold")))
    for name in removed:
        console.print(Text.assemble(("  - ", "red"), (name, "bold")))
    for change in changed:
        console.print(
            Text.assemble(
                ("  ~ ", "yellow"),
                (change["name"], "bold"),
                f" {change['field']}: {change['old']} -> {change['new']}",
            )
        )


def print_restore_summary(result: RestoreResult) -> None:
    """Print one row per restored dependency with what restore did to it."""
    if not result.outcomes:
        console.print("[dim]Nothing to restore.[/dim]")
        return

    table = Table(title="Restored dependencies", show_header=True, header_style="bold")
    table.add_column("Repository", style="bold")
    table.add_column("Result")
    for outcome in result.outcomes:
        style = _ACTION_STYLES.get(outcome.action, "white")
        table.add_row(str(outcome.name), Text(outcome.message, style=style))
    console.print(table)

    checked_out = len(result.checked_out)
    console.print(
        f"[bold]{len(result.outcomes)}[/bold] dependencies | "
        f"{checked_out} checked out | {len(result.outcomes) - checked_out} unchanged"
    )


def print_user_error(messages: list[str]) -> None:
    """Print a user-facing error and the user-facing errors that caused it."""
    if not messages:
        return
    first, *causes = messages
    click.echo(f"Error: {first}", err=True)
    for cause in causes:
        click.echo(f"  caused by: {cause}", err=True)


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout."""
    console.print_json(json.dumps(data, default=str))
