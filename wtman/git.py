"""Git operations using GitPython."""

import os
from dataclasses import dataclass
from pathlib import Path

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from wtman.errors import GitError
from wtman.logging import logger


@dataclass(frozen=True)
class WorktreeInfo:
    """One entry of `git worktree list`."""

    path: Path
    branch: str = ""
    is_detached: bool = False
    commit: str = ""
    commit_date: str = ""
    commit_message: str = ""


def _error_message(error: GitCommandError) -> str:
    stderr = error.stderr.strip() if isinstance(error.stderr, str) else ""
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:") :].strip().strip("'")
    return stderr or str(error)


def get_repo(working_dir: Path) -> Repo:
    """Open the repository containing working_dir."""
    try:
        return Repo(working_dir, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise GitError(f"Not a git repository: {working_dir}") from e


def get_main_tree_path(cwd: Path | None = None) -> Path:
    """Absolute path of the main worktree, from any worktree of the repository."""
    repo = get_repo(cwd or Path.cwd())
    return Path(repo.common_dir).resolve().parent


def is_main_tree(path: Path, main_tree_path: Path) -> bool:
    return os.path.normpath(path) == os.path.normpath(main_tree_path)


def branch_exists(branch: str, cwd: Path | None = None) -> bool:
    """Check if a local branch exists."""
    repo = get_repo(cwd or Path.cwd())
    try:
        repo.git.show_ref("--verify", "--quiet", f"refs/heads/{branch}")
    except GitCommandError:
        return False
    return True


def add_worktree(path: Path, branch: str, cwd: Path | None = None) -> None:
    """Create a worktree at path, creating the branch if it does not exist."""
    repo = get_repo(cwd or Path.cwd())
    try:
        if branch_exists(branch, cwd):
            repo.git.worktree("add", str(path), branch)
        else:
            repo.git.worktree("add", "-b", branch, str(path))
    except GitCommandError as e:
        raise GitError(_error_message(e)) from e
    logger.debug(f"git worktree add {path} ({branch})")


def list_worktrees(cwd: Path | None = None) -> list[WorktreeInfo]:
    """List all worktrees of the repository, main tree first."""
    repo = get_repo(cwd or Path.cwd())
    try:
        output = repo.git.worktree("list", "--porcelain")
    except GitCommandError as e:
        raise GitError(_error_message(e)) from e

    entries: list[dict] = []
    current: dict | None = None
    for line in output.splitlines():
        key, _, value = line.strip().partition(" ")
        if key == "worktree":
            current = {"path": Path(value)}
            entries.append(current)
        elif current is None:
            continue
        elif key == "HEAD":
            current["commit"] = value
        elif key == "branch":
            current["branch"] = value.removeprefix("refs/heads/")
        elif key == "detached":
            current["is_detached"] = True

    worktrees = []
    for entry in entries:
        if entry.get("is_detached") and entry.get("commit"):
            commit = repo.commit(entry["commit"])
            entry["commit_date"] = commit.committed_datetime.strftime("%Y-%m-%d")
            entry["commit_message"] = str(commit.summary)
        worktrees.append(WorktreeInfo(**entry))
    return worktrees


def has_uncommitted_changes(path: Path) -> bool:
    """Check for staged, unstaged or untracked changes."""
    return get_repo(path).is_dirty(untracked_files=True)


def has_unpushed_commits(path: Path) -> bool:
    """Check for commits not yet on the upstream (or on any remote)."""
    repo = get_repo(path)
    try:
        tracking = repo.active_branch.tracking_branch()
    except TypeError:
        # Detached HEAD
        tracking = None

    try:
        if tracking is not None:
            count = repo.git.rev_list("--count", f"{tracking.name}..HEAD")
        else:
            count = repo.git.rev_list("--count", "HEAD", "--not", "--remotes")
    except GitCommandError as e:
        raise GitError(_error_message(e)) from e
    return int(count or 0) > 0


def remove_worktree(path: Path, force: bool = False, cwd: Path | None = None) -> None:
    repo = get_repo(cwd or Path.cwd())
    args = ["remove"]
    if force:
        args.append("--force")
    args.append(str(path))
    try:
        repo.git.worktree(*args)
    except GitCommandError as e:
        raise GitError(_error_message(e)) from e
    logger.debug(f"git worktree {' '.join(args)}")


def delete_branch(branch: str, force: bool = False, cwd: Path | None = None) -> None:
    repo = get_repo(cwd or Path.cwd())
    try:
        repo.git.branch("-D" if force else "-d", branch)
    except GitCommandError as e:
        raise GitError(_error_message(e)) from e


def get_worktree_by_branch_name(
    branch: str, worktrees: list[WorktreeInfo]
) -> WorktreeInfo | None:
    for worktree in worktrees:
        if worktree.branch and worktree.branch == branch:
            return worktree
    return None


def get_worktree_by_path(name: str, worktrees: list[WorktreeInfo]) -> WorktreeInfo | None:
    """Find a worktree by full path, path relative to cwd, or directory name."""
    wanted = os.path.normpath(os.path.abspath(name))
    for worktree in worktrees:
        if os.path.normpath(worktree.path) == wanted:
            return worktree
    for worktree in worktrees:
        if worktree.path.name == name:
            return worktree
    return None


def get_worktree_by_name(name: str, worktrees: list[WorktreeInfo]) -> WorktreeInfo | None:
    """Look a worktree up by branch name first, then by path."""
    return get_worktree_by_branch_name(name, worktrees) or get_worktree_by_path(name, worktrees)
