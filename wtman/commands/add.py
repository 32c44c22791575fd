"""Add command for worktree management."""

import os
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from wtman.config import HookPhase, load_config
from wtman.errors import GitError
from wtman.git import add_worktree, get_main_tree_path
from wtman.logging import logger
from wtman.metadata import WorktreeMetadata, parse_tags
from wtman.template import HookContext, WorktreeTemplateContext, expand_worktree_path
from wtman.utils import fail

from .common import handle_errors, run_phase, save_worktree_metadata


def resolve_worktree_path(template: str, context: WorktreeTemplateContext, separator) -> Path:
    """Expand `worktree.path`; relative results are taken from the main tree."""
    expanded = expand_worktree_path(template, context, separator)
    return Path(os.path.normpath(context.original_path / expanded))


@click.command()
@click.argument("branch")
@click.option("--desc", "-d", "description", help="Description stored with the worktree")
@click.option("--tags", "-t", help="Comma-separated tags stored with the worktree")
@click.pass_context
@handle_errors
def add(ctx: click.Context, branch: str, description: str | None, tags: str | None) -> None:
    """Add a new worktree for BRANCH.

    The branch is created if it does not exist yet. The worktree location
    comes from `worktree.path` in .wtman/config.yaml.

    \b
    Examples:
        wtman add feature/add-cart
        wtman add fix-login --desc "Login redirect loop" --tags bug,urgent
    """
    console: Console = ctx.obj["console"]

    cwd = Path.cwd()
    main_tree_path = get_main_tree_path(cwd)
    config = load_config(cwd, main_tree_path)

    worktree_path = resolve_worktree_path(
        config.worktree.path,
        WorktreeTemplateContext(original_path=main_tree_path, branch=branch),
        config.worktree.separator,
    )
    logger.debug(f"Worktree path for {branch}: {worktree_path}")

    run_phase(
        console,
        config,
        HookPhase.PRE_ADD,
        HookContext(original_path=main_tree_path, branch=branch),
    )

    try:
        add_worktree(worktree_path, branch, main_tree_path)
    except GitError as e:
        fail(console, f"Failed to create worktree: {e}")
    console.print(f"[green]✓[/green] Created worktree at: {escape(str(worktree_path))}")

    if description or tags:
        save_worktree_metadata(
            main_tree_path,
            worktree_path,
            WorktreeMetadata(description=description or "", tags=parse_tags(tags or "")),
        )

    run_phase(
        console,
        config,
        HookPhase.POST_ADD,
        HookContext(original_path=main_tree_path, branch=branch, worktree_path=worktree_path),
    )
