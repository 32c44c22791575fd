"""Error types raised by wtman."""

from pathlib import Path


class WtmanError(Exception):
    """Base error for all wtman failures."""


class ConfigError(WtmanError):
    """A configuration file could not be used."""

    def __init__(self, path: Path, message: str):
        super().__init__(message)
        self.path = path


class ConfigParseError(ConfigError):
    """Configuration file is not valid YAML."""

    def __init__(self, path: Path, reason: str):
        super().__init__(path, f"Failed to parse {path}: {reason}")
        self.reason = reason


class ConfigValidationError(ConfigError):
    """Configuration file parses but does not match the schema."""

    def __init__(self, path: Path, issues: list[str]):
        lines = "\n".join(f"  - {issue}" for issue in issues)
        super().__init__(path, f"Invalid configuration in {path}:\n{lines}")
        self.issues = issues


class ActionError(WtmanError):
    """A single hook action failed."""


class CommandFailedError(ActionError):
    """A hook shell command exited with a non-zero status."""

    def __init__(self, exit_code: int):
        super().__init__(f"Command failed with exit code {exit_code}")
        self.exit_code = exit_code


class WorktreeUnavailableError(ActionError):
    """A worktree-scoped action was used in a phase without a worktree."""

    def __init__(self, action: str, phase: str):
        super().__init__(
            f"'{action}' action cannot be used in {phase} hook: worktree does not exist"
        )
        self.action = action
        self.phase = phase


class GitError(WtmanError):
    """A git invocation failed."""


class UserAbort(WtmanError):
    """The user cancelled an interactive prompt."""
