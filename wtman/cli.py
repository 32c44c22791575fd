"""Main CLI entry point for wtman."""

import sys

import click
from rich.console import Console

from wtman import __version__
from wtman.commands import add, list_command, remove
from wtman.logging import logger
from wtman.settings import get_settings
from wtman.utils import AliasedGroup


@click.group(
    cls=AliasedGroup,
    aliases={
        "a": "add",
        "new": "add",
        "create": "add",
        "rm": "remove",
        "del": "remove",
        "ls": "list",
    },
    invoke_without_command=True,
)
@click.option("--version", "-v", is_flag=True, help="Show version and exit")
@click.option("--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, version: bool, verbose: bool) -> None:
    """wtman - Git worktree manager.

    Creates and removes worktrees at a configured location and runs
    lifecycle hooks defined in .wtman/config.yaml around them.
    """
    settings = get_settings()
    verbose = verbose or settings.verbose

    ctx.ensure_object(dict)
    ctx.obj["console"] = Console(no_color=settings.no_color)

    logger.configure(verbose=verbose, no_color=settings.no_color)

    if version:
        click.echo(f"wtman v{__version__}")
        sys.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(add)
cli.add_command(remove)
cli.add_command(list_command)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
