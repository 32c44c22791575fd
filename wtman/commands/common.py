"""Helpers shared by the worktree commands."""

import functools
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console
from rich.markup import escape

from wtman.config import Config, HookPhase
from wtman.errors import UserAbort, WtmanError
from wtman.hooks import execute_hooks
from wtman.logging import logger
from wtman.metadata import (
    WorktreeMetadata,
    delete_worktree_metadata,
    load_metadata,
    save_metadata,
    set_worktree_metadata,
)
from wtman.template import HookContext
from wtman.utils import fail


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Turn wtman errors raised by a command into an exit code."""

    @functools.wraps(func)
    def wrapper(ctx: click.Context, *args: Any, **kwargs: Any) -> Any:
        console: Console = ctx.obj["console"]
        try:
            return func(ctx, *args, **kwargs)
        except UserAbort:
            console.print("\nCancelled.")
            raise click.exceptions.Exit(130) from None
        except WtmanError as e:
            fail(console, str(e))

    return wrapper


def run_phase(console: Console, config: Config, phase: HookPhase, context: HookContext) -> None:
    """Run the hooks of one phase; exit the command if a step fails."""
    steps = config.hooks(phase)
    if not steps:
        return

    logger.debug(f"Running {len(steps)} {phase.value} hook step(s)")
    result = execute_hooks(phase, steps, context, console=console)
    if not result.success:
        fail(console, f'Hook "{result.failed_step}" failed: {result.error}')


def save_worktree_metadata(
    main_tree_path: Path, worktree_path: Path, data: WorktreeMetadata
) -> None:
    """Record metadata for a new worktree; failures are only warnings."""
    try:
        metadata = load_metadata(main_tree_path)
        save_metadata(
            main_tree_path, set_worktree_metadata(metadata, str(worktree_path), data)
        )
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning(f"Failed to save metadata: {escape(str(e))}")


def remove_worktree_metadata(main_tree_path: Path, worktree_path: Path) -> None:
    """Drop metadata of a removed worktree; failures are only warnings."""
    try:
        metadata = load_metadata(main_tree_path)
        if str(worktree_path) not in metadata:
            return
        save_metadata(main_tree_path, delete_worktree_metadata(metadata, str(worktree_path)))
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning(f"Failed to delete metadata: {escape(str(e))}")
