"""Flat `${{ key }}` template expansion for worktree paths and hook commands."""

import re
from dataclasses import dataclass
from pathlib import Path

from wtman.config.schema import Separator

_PLACEHOLDER = re.compile(r"\$\{\{\s*([^}]+)\s*\}\}")

_SEPARATOR_CHARS = {
    Separator.HYPHEN: "-",
    Separator.UNDERSCORE: "_",
}


@dataclass(frozen=True)
class WorktreeTemplateContext:
    """Variables available to `worktree.path`."""

    original_path: Path
    branch: str

    @property
    def original_basename(self) -> str:
        return self.original_path.name

    def variables(self) -> dict[str, str]:
        return {
            "original.path": str(self.original_path),
            "original.basename": self.original_basename,
            "worktree.branch": self.branch,
        }


@dataclass(frozen=True)
class HookContext(WorktreeTemplateContext):
    """Variables available to hook commands, paths and working directories.

    `worktree_path` is only set while the worktree exists on disk
    (post-worktree-add and pre-worktree-remove).
    """

    worktree_path: Path | None = None

    @property
    def worktree_basename(self) -> str:
        return self.worktree_path.name if self.worktree_path else ""

    def variables(self) -> dict[str, str]:
        variables = super().variables()
        variables["worktree.path"] = str(self.worktree_path) if self.worktree_path else ""
        variables["worktree.basename"] = self.worktree_basename
        return variables


def transform_branch(branch: str, separator: Separator) -> str:
    """Replace every `/` in a branch name according to the separator."""
    replacement = _SEPARATOR_CHARS.get(Separator(separator))
    if replacement is None:
        return branch
    return branch.replace("/", replacement)


def expand_template(template: str, variables: dict[str, str]) -> str:
    """Substitute `${{ key }}` placeholders; unknown keys become empty strings."""
    return _PLACEHOLDER.sub(lambda match: variables.get(match.group(1).strip(), ""), template)


def expand_worktree_path(
    template: str, context: WorktreeTemplateContext, separator: Separator
) -> str:
    """Expand `worktree.path` with the separator applied to the branch."""
    variables = context.variables()
    variables["worktree.branch"] = transform_branch(context.branch, separator)
    return expand_template(template, variables)


def expand_hook_command(template: str, context: HookContext) -> str:
    """Expand a hook template; the branch is kept as-is."""
    return expand_template(template, context.variables())
