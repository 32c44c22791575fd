"""Remove command for worktree management."""

import os
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from wtman.config import Config, DeleteBranch, HookPhase, load_config
from wtman.errors import GitError
from wtman.git import (
    WorktreeInfo,
    delete_branch,
    get_main_tree_path,
    get_worktree_by_name,
    has_uncommitted_changes,
    has_unpushed_commits,
    is_main_tree,
    list_worktrees,
    remove_worktree,
)
from wtman.logging import logger
from wtman.prompts import confirm, select
from wtman.template import HookContext
from wtman.utils import fail

from .common import handle_errors, remove_worktree_metadata, run_phase


def is_current_worktree(worktree: WorktreeInfo, cwd: Path) -> bool:
    """Whether cwd is the worktree or somewhere inside it."""
    path = os.path.normpath(worktree.path)
    current = os.path.normpath(cwd)
    return current == path or current.startswith(path + os.sep)


def worktree_label(worktree: WorktreeInfo, main_tree_path: Path) -> str:
    relative = os.path.relpath(worktree.path, main_tree_path)
    return f"{relative} [{worktree.branch}]" if worktree.branch else relative


def resolve_target(
    console: Console,
    name: str | None,
    worktrees: list[WorktreeInfo],
    main_tree_path: Path,
    cwd: Path,
    force: bool,
) -> WorktreeInfo:
    """Find the worktree to remove by name, or let the user pick one."""
    if name:
        found = get_worktree_by_name(name, worktrees)
        if found is None:
            fail(console, f"Worktree not found: {name}")
        if is_main_tree(found.path, main_tree_path):
            fail(console, "Cannot remove main worktree")
        if is_current_worktree(found, cwd):
            console.print("[red]Cannot remove the worktree you are currently in.[/red]")
            console.print("Please move to another directory first, then run:")
            console.print(f"  wtman remove {escape(found.branch or name)}")
            raise click.exceptions.Exit(1)
        return found

    removable = [
        wt
        for wt in worktrees
        if not is_main_tree(wt.path, main_tree_path) and not is_current_worktree(wt, cwd)
    ]
    if not removable:
        console.print("No removable worktrees available.")
        raise click.exceptions.Exit(0)

    selected: WorktreeInfo = select(
        "Select worktree to remove",
        [(worktree_label(wt, main_tree_path), wt) for wt in removable],
    )

    if not force and not confirm(
        f'Remove worktree "{worktree_label(selected, main_tree_path)}"?', default=True
    ):
        console.print("Aborted.")
        raise click.exceptions.Exit(0)

    return selected


def confirm_unsafe_removal(console: Console, worktree_path: Path) -> None:
    """Ask before throwing away uncommitted changes or unpushed commits."""
    if has_uncommitted_changes(worktree_path) and not confirm(
        "The worktree has uncommitted changes. Proceed anyway?"
    ):
        console.print("Aborted.")
        raise click.exceptions.Exit(0)

    if has_unpushed_commits(worktree_path) and not confirm(
        "The worktree has unpushed commits. Proceed anyway?"
    ):
        console.print("Aborted.")
        raise click.exceptions.Exit(0)


def should_delete_branch(
    branch: str, config: Config, force: bool, delete: bool, keep: bool
) -> bool:
    """Decide on branch deletion from flags first, then `worktree.deleteBranch`."""
    if delete:
        return True
    if keep:
        return False

    policy = config.worktree.delete_branch
    if policy == DeleteBranch.ALWAYS:
        return True
    if policy == DeleteBranch.NEVER:
        return False
    if force:
        return True
    return confirm(f'Delete branch "{branch}"?', default=True)


@click.command()
@click.argument("name", required=False)
@click.option("--force", "-f", is_flag=True, help="Skip confirmations and force removal")
@click.option(
    "--delete-branch", "delete_branch_flag", is_flag=True, help="Delete the branch after removing"
)
@click.option("--keep-branch", is_flag=True, help="Keep the branch after removing")
@click.pass_context
@handle_errors
def remove(
    ctx: click.Context,
    name: str | None,
    force: bool,
    delete_branch_flag: bool,
    keep_branch: bool,
) -> None:
    """Remove a worktree by NAME or pick one interactively.

    NAME is a branch name, a path, or the worktree directory name.

    \b
    Examples:
        wtman remove feature/add-cart
        wtman rm myapp-fix-login --force --delete-branch
    """
    console: Console = ctx.obj["console"]

    if delete_branch_flag and keep_branch:
        raise click.UsageError("--delete-branch and --keep-branch are mutually exclusive")

    cwd = Path.cwd()
    main_tree_path = get_main_tree_path(cwd)
    config = load_config(cwd, main_tree_path)
    worktrees = list_worktrees(main_tree_path)

    target = resolve_target(console, name, worktrees, main_tree_path, cwd, force)
    worktree_path = Path(target.path)
    branch = target.branch
    logger.debug(f"Removing {worktree_path} (branch: {branch or 'detached'})")

    if not force:
        confirm_unsafe_removal(console, worktree_path)

    run_phase(
        console,
        config,
        HookPhase.PRE_REMOVE,
        HookContext(original_path=main_tree_path, branch=branch, worktree_path=worktree_path),
    )

    try:
        remove_worktree(worktree_path, force=force, cwd=main_tree_path)
    except GitError as e:
        fail(console, f"Failed to remove worktree: {e}")
    console.print(f"[green]✓[/green] Removed worktree: {escape(str(worktree_path))}")

    remove_worktree_metadata(main_tree_path, worktree_path)

    run_phase(
        console,
        config,
        HookPhase.POST_REMOVE,
        HookContext(original_path=main_tree_path, branch=branch),
    )

    if not branch:
        return

    if should_delete_branch(branch, config, force, delete_branch_flag, keep_branch):
        try:
            delete_branch(branch, force=force, cwd=main_tree_path)
        except GitError as e:
            console.print(
                f"[yellow]Warning: Failed to delete branch: {escape(str(e))}[/yellow]"
            )
        else:
            console.print(f"[green]✓[/green] Deleted branch: {escape(branch)}")
