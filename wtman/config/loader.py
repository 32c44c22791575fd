"""Load and merge layered wtman configuration files."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from wtman.errors import ConfigError, ConfigParseError, ConfigValidationError
from wtman.logging import logger

from .schema import (
    DEFAULT_WORKTREE_SETTINGS,
    Config,
    HookPhase,
    HookStep,
    RawConfig,
    WorktreeSettings,
)

CONFIG_DIR = ".wtman"
TEAM_CONFIG_FILE = "config.yaml"
USER_CONFIG_FILE = "config.user.yaml"
WORKTREE_CONFIG_FILE = "config.user.worktree.yaml"


def format_issues(error: ValidationError) -> list[str]:
    """Render pydantic errors as `dotted.location: message` lines."""
    issues = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "(root)"
        issues.append(f"{location}: {item['msg']}")
    return issues


def load_single_config(path: Path) -> RawConfig | None:
    """Load one configuration file.

    Returns None if the file does not exist.
    """
    if not path.exists():
        return None

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise ConfigParseError(path, str(e)) from e
    except OSError as e:
        raise ConfigError(path, f"Failed to read {path}: {e.strerror or e}") from e

    if data is None:
        data = {}

    try:
        config = RawConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(path, format_issues(e)) from e

    logger.debug(f"Loaded configuration from {path}")
    return config


def merge_worktree_settings(configs: list[RawConfig]) -> WorktreeSettings:
    """Merge `worktree:` sections field by field; later files win."""
    merged: dict[str, object] = {}
    for config in configs:
        if config.worktree is None:
            continue
        merged.update(config.worktree.model_dump(exclude_none=True))
    return WorktreeSettings.model_validate(merged)


def merge_hooks(phase: HookPhase, configs: list[RawConfig]) -> list[HookStep]:
    """Concatenate hook steps of one phase in load order."""
    steps: list[HookStep] = []
    for config in configs:
        steps.extend(config.hooks(phase) or [])
    return steps


def config_paths(cwd: Path, main_tree_path: Path) -> list[Path]:
    """Configuration files in load order: team, user, worktree-local."""
    return [
        cwd / CONFIG_DIR / TEAM_CONFIG_FILE,
        main_tree_path / CONFIG_DIR / USER_CONFIG_FILE,
        cwd / CONFIG_DIR / WORKTREE_CONFIG_FILE,
    ]


def load_config(cwd: Path | None = None, main_tree_path: Path | None = None) -> Config:
    """Load all configuration files and merge them into one Config."""
    if cwd is None:
        cwd = Path.cwd()
    if main_tree_path is None:
        from wtman.git import get_main_tree_path

        main_tree_path = get_main_tree_path(cwd)

    configs = []
    for path in config_paths(cwd, main_tree_path):
        config = load_single_config(path)
        if config is not None:
            configs.append(config)

    worktree = DEFAULT_WORKTREE_SETTINGS.model_dump()
    worktree.update(merge_worktree_settings(configs).model_dump(exclude_none=True))

    merged = {"worktree": worktree}
    for phase in HookPhase:
        merged[phase.value] = merge_hooks(phase, configs)

    return Config.model_validate(merged)
