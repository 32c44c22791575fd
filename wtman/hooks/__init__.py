"""Lifecycle hook execution."""

from wtman.hooks.actions import (
    ActionResult,
    copy_action,
    link_action,
    mkdir_action,
    normalize_targets,
    remove_action,
)
from wtman.hooks.executor import (
    HookExecutionResult,
    PhaseStatus,
    default_working_directory,
    execute_hooks,
    is_worktree_available,
)
from wtman.hooks.runner import run_step

__all__ = [
    "ActionResult",
    "HookExecutionResult",
    "PhaseStatus",
    "copy_action",
    "default_working_directory",
    "execute_hooks",
    "is_worktree_available",
    "link_action",
    "mkdir_action",
    "normalize_targets",
    "remove_action",
    "run_step",
]
