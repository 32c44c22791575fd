"""Pytest fixtures for wtman tests."""

import subprocess
import tempfile
from pathlib import Path

import pytest
from click.testing import CliRunner

from wtman.settings import reset_settings


def run_git(*args: str, cwd: Path) -> str:
    """Run a git command in a test repository and return its stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Keep WTMAN_* variables of the developer's shell out of the tests."""
    for name in ("WTMAN_VERBOSE", "WTMAN_NO_COLOR", "WTMAN_SHELL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SHELL", "/bin/sh")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def temp_git_repo(temp_dir):
    """Create a git repository at <temp_dir>/foo with one commit.

    Worktrees created with the default path template land next to it, as
    <temp_dir>/foo-<branch>.
    """
    repo = temp_dir / "foo"
    repo.mkdir()

    run_git("-c", "init.defaultBranch=main", "init", cwd=repo)
    run_git("config", "user.email", "test@test.com", cwd=repo)
    run_git("config", "user.name", "Test", cwd=repo)
    run_git("config", "commit.gpgsign", "false", cwd=repo)

    (repo / "README.md").write_text("# Test")
    run_git("add", ".", cwd=repo)
    run_git("commit", "-m", "Initial commit", cwd=repo)

    return repo


@pytest.fixture
def git():
    """Run git commands in test repositories."""
    return run_git


@pytest.fixture
def write_config():
    """Write a .wtman/<name> file under a directory."""

    def _write(directory: Path, content: str, name: str = "config.yaml") -> Path:
        path = directory / ".wtman" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def runner():
    return CliRunner()
