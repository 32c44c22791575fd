"""Tests for hook filesystem actions and the shell runner."""

import os

from wtman.errors import CommandFailedError
from wtman.hooks import copy_action, link_action, mkdir_action, remove_action, run_step
from wtman.hooks.actions import normalize_targets, resolve_under


class TestPaths:
    """Tests for target path helpers."""

    def test_normalize_targets(self):
        """Test a single target and a list of targets both become lists."""
        assert normalize_targets(".env") == [".env"]
        assert normalize_targets(["a", "b"]) == ["a", "b"]

    def test_leading_slash_stays_under_base(self, temp_dir):
        """Test an absolute-looking target is joined under the base."""
        assert resolve_under(temp_dir, "/etc/hosts") == temp_dir / "etc" / "hosts"


class TestMkdirAndRemove:
    """Tests for mkdir and remove actions."""

    def test_mkdir_creates_parents(self, temp_dir):
        """Test mkdir creates nested directories."""
        result = mkdir_action(["a/b/c", "d"], temp_dir)
        assert result.success
        assert (temp_dir / "a" / "b" / "c").is_dir()
        assert (temp_dir / "d").is_dir()

    def test_mkdir_existing_is_ok(self, temp_dir):
        """Test mkdir on an existing directory succeeds."""
        (temp_dir / "a").mkdir()
        assert mkdir_action(["a"], temp_dir).success

    def test_mkdir_over_file_fails(self, temp_dir):
        """Test mkdir fails when a file is in the way."""
        (temp_dir / "a").write_text("file")
        result = mkdir_action(["a"], temp_dir)
        assert not result.success
        assert result.error is not None

    def test_remove_files_and_dirs(self, temp_dir):
        """Test remove deletes files and directory trees."""
        (temp_dir / "cache" / "nested").mkdir(parents=True)
        (temp_dir / "cache" / "nested" / "x").write_text("x")
        (temp_dir / "tmp.log").write_text("log")

        result = remove_action(["cache", "tmp.log"], temp_dir)

        assert result.success
        assert not (temp_dir / "cache").exists()
        assert not (temp_dir / "tmp.log").exists()

    def test_remove_missing_is_skipped(self, temp_dir):
        """Test removing a missing target is not an error."""
        assert remove_action(["nope"], temp_dir).success

    def test_remove_symlink_keeps_target(self, temp_dir):
        """Test removing a symlink leaves its target alone."""
        (temp_dir / "real").mkdir()
        (temp_dir / "real" / "keep").write_text("keep")
        os.symlink("real", temp_dir / "alias")

        assert remove_action(["alias"], temp_dir).success

        assert not os.path.lexists(temp_dir / "alias")
        assert (temp_dir / "real" / "keep").exists()


class TestCopy:
    """Tests for the copy action."""

    def test_copy_file_creates_parents(self, temp_dir):
        """Test copy creates parent directories in the worktree."""
        original = temp_dir / "original"
        worktree = temp_dir / "worktree"
        (original / "config").mkdir(parents=True)
        (original / "config" / ".env").write_text("SECRET=1")
        worktree.mkdir()

        result = copy_action(["config/.env"], original, worktree)

        assert result.success
        assert (worktree / "config" / ".env").read_text() == "SECRET=1"

    def test_copy_overwrites(self, temp_dir):
        """Test copy replaces an existing file."""
        original = temp_dir / "original"
        worktree = temp_dir / "worktree"
        original.mkdir()
        worktree.mkdir()
        (original / ".env").write_text("new")
        (worktree / ".env").write_text("old")

        assert copy_action([".env"], original, worktree).success
        assert (worktree / ".env").read_text() == "new"

    def test_copy_directory(self, temp_dir):
        """Test copy handles directory trees."""
        original = temp_dir / "original"
        worktree = temp_dir / "worktree"
        (original / "data" / "sub").mkdir(parents=True)
        (original / "data" / "sub" / "f").write_text("f")
        worktree.mkdir()

        assert copy_action(["data"], original, worktree).success
        assert (worktree / "data" / "sub" / "f").read_text() == "f"

    def test_copy_missing_source_fails(self, temp_dir):
        """Test copy fails for a missing source."""
        result = copy_action(["nope"], temp_dir, temp_dir / "wt")
        assert not result.success
        assert "Source does not exist" in str(result.error)

    def test_copy_stops_at_first_missing_source(self, temp_dir):
        """Test copy does not continue after a failed target."""
        original = temp_dir / "original"
        worktree = temp_dir / "worktree"
        original.mkdir()
        worktree.mkdir()
        (original / "b").write_text("b")

        result = copy_action(["a", "b"], original, worktree)

        assert not result.success
        assert not (worktree / "b").exists()


class TestLink:
    """Tests for the link action."""

    def test_link_is_relative(self, temp_dir):
        """Test link creates a relative symlink to the original."""
        original = temp_dir / "original"
        worktree = temp_dir / "worktree"
        (original / "node_modules").mkdir(parents=True)
        worktree.mkdir()

        result = link_action(["node_modules"], original, worktree)

        assert result.success
        link = worktree / "node_modules"
        assert link.is_symlink()
        assert not os.path.isabs(os.readlink(link))
        assert link.resolve() == (original / "node_modules").resolve()

    def test_link_existing_destination_fails(self, temp_dir):
        """Test link never replaces an existing destination."""
        original = temp_dir / "original"
        worktree = temp_dir / "worktree"
        original.mkdir()
        worktree.mkdir()
        (original / ".env").write_text("a")
        (worktree / ".env").write_text("b")

        result = link_action([".env"], original, worktree)

        assert not result.success
        assert "Destination already exists" in str(result.error)
        assert (worktree / ".env").read_text() == "b"

    def test_link_missing_source_fails(self, temp_dir):
        """Test link fails for a missing source."""
        (temp_dir / "wt").mkdir()
        result = link_action(["nope"], temp_dir, temp_dir / "wt")
        assert not result.success
        assert "Source does not exist" in str(result.error)


class TestRunStep:
    """Tests for running shell commands."""

    def test_runs_in_working_directory(self, temp_dir):
        """Test commands run in the given directory."""
        result = run_step("pwd > where.txt", temp_dir)
        assert result.success
        assert (temp_dir / "where.txt").read_text().strip() == str(temp_dir)

    def test_shell_features(self, temp_dir):
        """Test commands are interpreted by the shell."""
        result = run_step("echo one > out && echo two >> out", temp_dir)
        assert result.success
        assert (temp_dir / "out").read_text().split() == ["one", "two"]

    def test_non_zero_exit(self, temp_dir):
        """Test a non-zero exit code becomes a failure."""
        result = run_step("exit 3", temp_dir)
        assert not result.success
        assert isinstance(result.error, CommandFailedError)
        assert result.error.exit_code == 3
        assert str(result.error) == "Command failed with exit code 3"

    def test_shell_from_settings(self, temp_dir, monkeypatch):
        """Test WTMAN_SHELL takes precedence over SHELL."""
        monkeypatch.setenv("WTMAN_SHELL", "/bin/sh")
        monkeypatch.setenv("SHELL", "/nonexistent/shell")
        assert run_step("true", temp_dir).success

    def test_missing_working_directory(self, temp_dir):
        """Test a missing working directory is reported."""
        result = run_step("true", temp_dir / "nope")
        assert not result.success
        assert "Could not start" in str(result.error)

    def test_missing_shell(self, temp_dir, monkeypatch):
        """Test a missing shell binary is reported."""
        monkeypatch.setenv("WTMAN_SHELL", "/nonexistent/shell")
        result = run_step("true", temp_dir)
        assert not result.success
        assert "Could not start" in str(result.error)
