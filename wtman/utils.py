"""Shared helpers for wtman commands."""

from typing import Any, NoReturn

import click
from rich.console import Console
from rich.markup import escape


class AliasedGroup(click.Group):
    """Click group resolving aliases and unique command prefixes."""

    def __init__(self, *args: Any, aliases: dict[str, str] | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.aliases = aliases or {}

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, self.aliases.get(cmd_name, cmd_name))
        if command is not None:
            return command

        matches = [name for name in self.list_commands(ctx) if name.startswith(cmd_name)]
        if len(matches) == 1:
            return super().get_command(ctx, matches[0])
        if matches:
            ctx.fail(f"Too many matches: {', '.join(sorted(matches))}")
        return None

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        # Report the canonical name, not the alias that was typed
        _, command, args = super().resolve_command(ctx, args)
        return (command.name if command else None), command, args

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        if self.aliases:
            by_command: dict[str, list[str]] = {}
            for alias, command in self.aliases.items():
                by_command.setdefault(command, []).append(alias)
            with formatter.section("Aliases"):
                rows = [
                    (", ".join(sorted(aliases)), f"-> {command}")
                    for command, aliases in sorted(by_command.items())
                ]
                formatter.write_dl(rows)
        super().format_epilog(ctx, formatter)


def fail(console: Console, message: str, code: int = 1) -> NoReturn:
    """Print an error and end the command with a non-zero exit code."""
    console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)
    raise click.exceptions.Exit(code)
