"""repolock CLI - Pin and restore the dependencies of a Git workspace.

Entry point for the ``repolock`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    update   - Check out declared dependencies and write the lock file.
    restore  - Check out dependencies at their locked revisions.
    install  - Restore exactly, then run the configured importer.
    list     - Show locked dependencies.
    help     - Show help for repolock or one of its commands.

Usage::

    repolock update
    repolock restore
    repolock restore --exact
    repolock -C ../app install
    repolock list --format json

Exit code 0 on success and 1 on any error. Errors the user can fix are
reported as a one-line message; anything else is reported as an internal
error with a traceback.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, cast

import click
from rich.logging import RichHandler

from repolock import __version__
from repolock.cli.context import AppContext
from repolock.cli.install import install_command
from repolock.cli.list_cmd import list_command
from repolock.cli.output import err_console, print_user_error
from repolock.cli.restore import restore_command
from repolock.cli.update import update_command
from repolock.config import load_settings
from repolock.exceptions import UserError
from repolock.vcs import GitClient


class RepolockGroup(click.Group):
    """Click group that turns exceptions into error reports and exit code 1."""

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except (click.ClickException, click.exceptions.Exit, click.Abort):
            raise
        except UserError as exc:
            print_user_error(exc.user_messages())
            ctx.exit(1)
        except Exception:
            err_console.print("[bold red]An internal error occurred[/bold red]")
            err_console.print_exception()
            ctx.exit(1)


def _configure_logging(verbose: bool) -> None:
    handler = RichHandler(
        console=err_console,
        show_time=False,
        show_path=False,
        markup=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


@click.group(cls=RepolockGroup)
@click.version_option(version=__version__, prog_name="repolock")
@click.option(
    "--directory", "-C",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Run as if started in this directory.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: $REPOLOCK_CONFIG or ~/.config/repolock/config.yaml).",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log VCS commands.")
@click.pass_context
def cli(ctx: click.Context, directory: Path, config_path: Path | None, verbose: bool) -> None:
    """repolock: Pin and restore the Git dependencies of a repository.

    Dependencies are declared one URL per line in a .repolock file, cloned
    side by side with the repository, and pinned to exact revisions in
    .repolock.lock.
    """
    _configure_logging(verbose)
    overrides = ctx.obj if isinstance(ctx.obj, dict) else {}
    settings = load_settings(config_path)
    vcs = overrides.get("vcs") or GitClient(timeout=settings.vcs_timeout)
    ctx.obj = AppContext(directory=directory.resolve(), settings=settings, vcs=vcs)


@click.command("help")
@click.argument("command", required=False)
@click.pass_context
def help_command(ctx: click.Context, command: str | None) -> None:
    """Show help for repolock, or for COMMAND."""
    parent = ctx.parent if ctx.parent is not None else ctx
    if command is None:
        click.echo(parent.get_help())
        return
    group = cast(click.Group, parent.command)
    subcommand = group.get_command(parent, command)
    if subcommand is None:
        raise click.UsageError(f"No such command '{command}'.", ctx)
    with click.Context(subcommand, info_name=command, parent=parent) as sub_ctx:
        click.echo(subcommand.get_help(sub_ctx))


# Register all subcommands
cli.add_command(update_command)
cli.add_command(restore_command)
cli.add_command(install_command)
cli.add_command(list_command)
cli.add_command(help_command)
