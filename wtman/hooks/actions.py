"""Filesystem actions available to hook steps.

Every action returns an ActionResult instead of raising, so the executor can
attribute the failure to the step that caused it.
"""

import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from wtman.errors import ActionError
from wtman.logging import logger


@dataclass(frozen=True)
class ActionResult:
    """Outcome of one hook action."""

    success: bool
    error: ActionError | None = None

    @classmethod
    def ok(cls) -> "ActionResult":
        return cls(success=True)

    @classmethod
    def failed(cls, error: ActionError | Exception) -> "ActionResult":
        if not isinstance(error, ActionError):
            error = ActionError(str(error))
        return cls(success=False, error=error)


def normalize_targets(targets: str | list[str]) -> list[str]:
    """Accept a single path or a list of paths."""
    return [targets] if isinstance(targets, str) else list(targets)


def resolve_under(base: Path, target: str) -> Path:
    """Join a target below base; a leading slash does not escape base."""
    return Path(os.path.normpath(os.path.join(base, target.lstrip("/"))))


def mkdir_action(targets: list[str], working_directory: Path) -> ActionResult:
    """Create directories, including parents. Existing directories are fine."""
    try:
        for target in targets:
            path = resolve_under(working_directory, target)
            path.mkdir(parents=True, exist_ok=True)
            logger.debug(f"mkdir {path}")
    except OSError as e:
        return ActionResult.failed(e)
    return ActionResult.ok()


def remove_action(targets: list[str], working_directory: Path) -> ActionResult:
    """Remove files or directory trees. Missing targets are skipped."""
    try:
        for target in targets:
            path = resolve_under(working_directory, target)
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            elif os.path.lexists(path):
                path.unlink()
            else:
                logger.debug(f"remove: {path} does not exist, skipping")
                continue
            logger.debug(f"removed {path}")
    except OSError as e:
        return ActionResult.failed(e)
    return ActionResult.ok()


def copy_action(targets: list[str], original_path: Path, worktree_path: Path) -> ActionResult:
    """Copy files or directories from the original tree into the worktree.

    Existing destinations are overwritten. A missing source is an error.
    """
    try:
        for target in targets:
            source = resolve_under(original_path, target)
            destination = resolve_under(worktree_path, target)

            if not os.path.lexists(source):
                raise FileNotFoundError(f"Source does not exist: {source}")

            if destination.is_symlink():
                destination.unlink()
            destination.parent.mkdir(parents=True, exist_ok=True)

            if source.is_dir():
                shutil.copytree(source, destination, symlinks=True, dirs_exist_ok=True)
            elif destination.is_dir():
                raise IsADirectoryError(
                    f"Cannot overwrite directory {destination} with file {source}"
                )
            else:
                shutil.copy2(source, destination, follow_symlinks=False)
            logger.debug(f"copied {source} -> {destination}")
    except OSError as e:
        return ActionResult.failed(e)
    return ActionResult.ok()


def link_action(targets: list[str], original_path: Path, worktree_path: Path) -> ActionResult:
    """Symlink worktree paths to their counterparts in the original tree.

    Links use relative paths. A missing source or an existing destination is an
    error; links are never overwritten.
    """
    try:
        for target in targets:
            source = resolve_under(original_path, target)
            link_path = resolve_under(worktree_path, target)

            if not source.exists():
                raise FileNotFoundError(f"Source does not exist: {source}")
            if os.path.lexists(link_path):
                raise FileExistsError(f"Destination already exists: {link_path}")

            relative = os.path.relpath(source, link_path.parent)
            os.symlink(relative, link_path, target_is_directory=source.is_dir())
            logger.debug(f"linked {link_path} -> {relative}")
    except OSError as e:
        return ActionResult.failed(e)
    return ActionResult.ok()
