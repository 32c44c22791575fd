"""List command for worktree management."""

from pathlib import Path

import click
import yaml
from pydantic import ValidationError
from rich.console import Console

from wtman.git import get_main_tree_path, list_worktrees
from wtman.logging import logger
from wtman.metadata import (
    WorktreesMetadata,
    filter_worktrees_by_tags,
    load_metadata,
    parse_tags,
)
from wtman.output import OutputFormat, format_worktrees, render

from .common import handle_errors


def read_metadata(main_tree_path: Path) -> WorktreesMetadata:
    """Load metadata for display; an unreadable file counts as empty."""
    try:
        return load_metadata(main_tree_path)
    except (OSError, UnicodeDecodeError, ValidationError, yaml.YAMLError) as e:
        logger.debug(f"Ignoring worktree metadata: {e}")
        return {}


@click.command(name="list")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TABLE.value,
    show_default=True,
    help="Output format",
)
@click.option("--filter", "tag_filter", help="Only show worktrees carrying all of these tags")
@click.pass_context
@handle_errors
def list_command(ctx: click.Context, output_format: str, tag_filter: str | None) -> None:
    """List all worktrees with their description and tags.

    \b
    Examples:
        wtman list
        wtman ls --format json
        wtman list --filter bug,urgent
    """
    console: Console = ctx.obj["console"]

    cwd = Path.cwd()
    main_tree_path = get_main_tree_path(cwd)
    worktrees = list_worktrees(main_tree_path)
    metadata = read_metadata(main_tree_path)

    tags = parse_tags(tag_filter or "")
    if tags:
        wanted = set(filter_worktrees_by_tags(metadata, tags))
        worktrees = [wt for wt in worktrees if str(wt.path) in wanted]

    render(format_worktrees(worktrees, cwd, metadata), OutputFormat(output_format), console)
