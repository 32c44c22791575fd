"""Configuration schema for wtman YAML files."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Separator(str, Enum):
    """How `/` in a branch name is rendered in a worktree path."""

    HYPHEN = "hyphen"
    UNDERSCORE = "underscore"
    SLASH = "slash"


class DeleteBranch(str, Enum):
    """Branch handling after a worktree is removed."""

    ASK = "ask"
    ALWAYS = "always"
    NEVER = "never"


class HookPhase(str, Enum):
    """Lifecycle points at which hooks run."""

    PRE_ADD = "pre-worktree-add"
    POST_ADD = "post-worktree-add"
    PRE_REMOVE = "pre-worktree-remove"
    POST_REMOVE = "post-worktree-remove"

    @property
    def worktree_available(self) -> bool:
        """Whether the worktree exists on disk while this phase runs."""
        return self in {HookPhase.POST_ADD, HookPhase.PRE_REMOVE}


class ActionKind(str, Enum):
    """Mutually exclusive actions a hook step can carry."""

    RUN = "run"
    COPY = "copy"
    LINK = "link"
    MKDIR = "mkdir"
    REMOVE = "remove"


ACTION_KEYS = tuple(kind.value for kind in ActionKind)

DEFAULT_WORKTREE_PATH = "../${{ original.basename }}-${{ worktree.branch }}"


class StepAction(BaseModel):
    """The single action of a hook step.

    `payload` is the shell command for `run` and one or more paths for the
    other kinds.
    """

    model_config = ConfigDict(frozen=True)

    kind: ActionKind
    payload: str | list[str]


def _check_action_payload(key: str, value: Any) -> None:
    if key == ActionKind.RUN.value:
        if not isinstance(value, str):
            raise ValueError("'run' must be a string")
        return
    if isinstance(value, str):
        return
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return
    raise ValueError(f"'{key}' must be a string or a list of strings")


class HookStep(BaseModel):
    """One named hook step.

    In YAML the action is written as one of the keys `run`, `copy`, `link`,
    `mkdir` or `remove`; it is folded into `action` while validating. A step
    without any of those keys has no action and is skipped when executed.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    action: StepAction | None = None
    working_directory: str | None = Field(default=None, alias="working-directory")

    @model_validator(mode="before")
    @classmethod
    def _collect_action(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        present = [key for key in ACTION_KEYS if key in data]
        if len(present) > 1:
            raise ValueError(
                f"step defines multiple actions ({', '.join(present)}); exactly one is allowed"
            )
        if not present:
            return data

        key = present[0]
        _check_action_payload(key, data[key])
        collected = {k: v for k, v in data.items() if k not in ACTION_KEYS}
        collected["action"] = {"kind": key, "payload": data[key]}
        return collected


class WorktreeSettings(BaseModel):
    """`worktree:` section as written in a single file."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    path: str | None = None
    separator: Separator | None = None
    delete_branch: DeleteBranch | None = Field(default=None, alias="deleteBranch")


class ResolvedWorktreeSettings(BaseModel):
    """`worktree:` section after merging and defaults."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    path: str
    separator: Separator
    delete_branch: DeleteBranch = Field(alias="deleteBranch")


class RawConfig(BaseModel):
    """Content of one configuration file; every field is optional."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    worktree: WorktreeSettings | None = None
    pre_worktree_add: list[HookStep] | None = Field(default=None, alias="pre-worktree-add")
    post_worktree_add: list[HookStep] | None = Field(default=None, alias="post-worktree-add")
    pre_worktree_remove: list[HookStep] | None = Field(default=None, alias="pre-worktree-remove")
    post_worktree_remove: list[HookStep] | None = Field(
        default=None, alias="post-worktree-remove"
    )

    def hooks(self, phase: HookPhase) -> list[HookStep] | None:
        return getattr(self, _phase_field(phase))


class Config(BaseModel):
    """Fully resolved configuration for one command invocation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    worktree: ResolvedWorktreeSettings
    pre_worktree_add: list[HookStep] = Field(alias="pre-worktree-add")
    post_worktree_add: list[HookStep] = Field(alias="post-worktree-add")
    pre_worktree_remove: list[HookStep] = Field(alias="pre-worktree-remove")
    post_worktree_remove: list[HookStep] = Field(alias="post-worktree-remove")

    def hooks(self, phase: HookPhase) -> list[HookStep]:
        """Ordered hook steps for a lifecycle phase."""
        return getattr(self, _phase_field(phase))


def _phase_field(phase: HookPhase) -> str:
    return HookPhase(phase).value.replace("-", "_")


DEFAULT_WORKTREE_SETTINGS = ResolvedWorktreeSettings(
    path=DEFAULT_WORKTREE_PATH,
    separator=Separator.HYPHEN,
    delete_branch=DeleteBranch.ASK,
)
