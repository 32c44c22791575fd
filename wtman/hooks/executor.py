"""Sequential execution of lifecycle hook steps."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from wtman.config.schema import ActionKind, HookPhase, HookStep, StepAction
from wtman.errors import ActionError, WorktreeUnavailableError
from wtman.logging import console as default_console
from wtman.logging import logger
from wtman.template import HookContext, expand_hook_command

from .actions import (
    ActionResult,
    copy_action,
    link_action,
    mkdir_action,
    normalize_targets,
    remove_action,
)
from .runner import run_step


class PhaseStatus(str, Enum):
    """State of one hook phase run."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class HookExecutionResult:
    """Outcome of running every step of one phase."""

    phase: HookPhase
    status: PhaseStatus = PhaseStatus.PENDING
    step_index: int | None = None
    completed_steps: list[str] = field(default_factory=list)
    failed_step: str | None = None
    error: ActionError | None = None

    @property
    def success(self) -> bool:
        return self.status == PhaseStatus.SUCCEEDED


def is_worktree_available(phase: HookPhase) -> bool:
    """Whether copy/link can run in this phase."""
    return HookPhase(phase).worktree_available


def default_working_directory(phase: HookPhase, context: HookContext) -> Path:
    """Worktree path while the worktree exists, otherwise the original path.

    - post-worktree-add: worktree (just created)
    - pre-worktree-remove: worktree (still exists)
    - pre-worktree-add: original (not created yet)
    - post-worktree-remove: original (already deleted)
    """
    if is_worktree_available(phase) and context.worktree_path is not None:
        return context.worktree_path
    return context.original_path


def resolve_working_directory(
    step: HookStep, phase: HookPhase, context: HookContext
) -> Path:
    default = default_working_directory(phase, context)
    if not step.working_directory:
        return default
    expanded = Path(expand_hook_command(step.working_directory, context))
    if expanded.is_absolute():
        return expanded
    return default / expanded


def run_action(
    action: StepAction, phase: HookPhase, context: HookContext, working_directory: Path
) -> ActionResult:
    """Dispatch an action after expanding its payload."""
    if action.kind == ActionKind.RUN:
        return run_step(expand_hook_command(action.payload, context), working_directory)

    targets = [
        expand_hook_command(target, context) for target in normalize_targets(action.payload)
    ]

    if action.kind == ActionKind.MKDIR:
        return mkdir_action(targets, working_directory)
    if action.kind == ActionKind.REMOVE:
        return remove_action(targets, working_directory)

    # copy and link always go from the original tree into the worktree
    if not is_worktree_available(phase) or context.worktree_path is None:
        return ActionResult.failed(WorktreeUnavailableError(action.kind.value, phase.value))
    if action.kind == ActionKind.COPY:
        return copy_action(targets, context.original_path, context.worktree_path)
    return link_action(targets, context.original_path, context.worktree_path)


def execute_hooks(
    phase: HookPhase,
    steps: list[HookStep],
    context: HookContext,
    console: Console | None = None,
) -> HookExecutionResult:
    """Run hook steps in order, stopping at the first failure.

    Steps that completed before a failure are not rolled back.
    """
    phase = HookPhase(phase)
    console = console or default_console
    result = HookExecutionResult(phase=phase)

    for index, step in enumerate(steps):
        action = step.action
        if action is None:
            logger.debug(f"{phase.value}: step '{step.name}' has no action, skipping")
            continue

        result.status = PhaseStatus.RUNNING
        result.step_index = index

        working_directory = resolve_working_directory(step, phase, context)
        console.print(f"[bold cyan]-- {escape(step.name)} --[/bold cyan]")
        logger.debug(f"{phase.value}: {action.kind.value} in {working_directory}")

        outcome = run_action(action, phase, context, working_directory)
        if not outcome.success:
            result.status = PhaseStatus.FAILED
            result.failed_step = step.name
            result.error = outcome.error
            return result

        result.completed_steps.append(step.name)

    result.status = PhaseStatus.SUCCEEDED
    result.step_index = None
    return result
