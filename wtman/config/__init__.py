"""Layered YAML configuration for wtman."""

from wtman.config.loader import (
    config_paths,
    load_config,
    load_single_config,
    merge_hooks,
    merge_worktree_settings,
)
from wtman.config.schema import (
    DEFAULT_WORKTREE_PATH,
    ActionKind,
    Config,
    DeleteBranch,
    HookPhase,
    HookStep,
    RawConfig,
    Separator,
    StepAction,
    WorktreeSettings,
)

__all__ = [
    "DEFAULT_WORKTREE_PATH",
    "ActionKind",
    "Config",
    "DeleteBranch",
    "HookPhase",
    "HookStep",
    "RawConfig",
    "Separator",
    "StepAction",
    "WorktreeSettings",
    "config_paths",
    "load_config",
    "load_single_config",
    "merge_hooks",
    "merge_worktree_settings",
]
