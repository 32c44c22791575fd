"""Tests for worktree metadata storage."""

import pytest
import yaml
from pydantic import ValidationError

from wtman.metadata import (
    WorktreeMetadata,
    delete_worktree_metadata,
    filter_worktrees_by_tags,
    get_metadata_file_path,
    get_worktree_metadata,
    load_metadata,
    parse_tags,
    save_metadata,
    set_worktree_metadata,
)


class TestMetadataFile:
    """Tests for reading and writing .wtman/worktrees.yaml."""

    def test_missing_file_is_empty(self, temp_dir):
        """Test a missing file means no metadata."""
        assert load_metadata(temp_dir) == {}

    def test_save_creates_directory(self, temp_dir):
        """Test saving creates .wtman and round-trips."""
        metadata = {"/src/app-dev": WorktreeMetadata(description="Dev", tags=["a"])}

        save_metadata(temp_dir, metadata)

        path = get_metadata_file_path(temp_dir)
        assert path == temp_dir / ".wtman" / "worktrees.yaml"
        assert yaml.safe_load(path.read_text()) == {
            "/src/app-dev": {"description": "Dev", "tags": ["a"]}
        }
        assert load_metadata(temp_dir) == metadata

    def test_missing_fields_default(self, temp_dir):
        """Test missing fields get defaults."""
        path = get_metadata_file_path(temp_dir)
        path.parent.mkdir()
        path.write_text("/src/app-dev:\n  tags: [x]\n")

        entry = load_metadata(temp_dir)["/src/app-dev"]

        assert entry.description == ""
        assert entry.tags == ["x"]

    def test_invalid_content(self, temp_dir):
        """Test invalid content is rejected."""
        path = get_metadata_file_path(temp_dir)
        path.parent.mkdir()
        path.write_text("/src/app-dev:\n  tags: 5\n")

        with pytest.raises(ValidationError):
            load_metadata(temp_dir)


class TestMetadataUpdates:
    """Tests for non-mutating updates."""

    def test_set_and_get(self):
        """Test set returns a new mapping."""
        original = {}
        entry = WorktreeMetadata(description="x")

        updated = set_worktree_metadata(original, "/wt", entry)

        assert original == {}
        assert get_worktree_metadata(updated, "/wt") == entry
        assert get_worktree_metadata(updated, "/other") is None

    def test_delete(self):
        """Test delete returns a new mapping."""
        metadata = {"/a": WorktreeMetadata(), "/b": WorktreeMetadata()}

        updated = delete_worktree_metadata(metadata, "/a")

        assert list(updated) == ["/b"]
        assert list(metadata) == ["/a", "/b"]


class TestTags:
    """Tests for tag parsing and filtering."""

    def test_parse_tags(self):
        """Test tags are split and trimmed."""
        assert parse_tags(" bug, urgent ,,ui ") == ["bug", "urgent", "ui"]
        assert parse_tags("") == []

    def test_filter_requires_all_tags(self):
        """Test filtering requires every tag."""
        metadata = {
            "/a": WorktreeMetadata(tags=["bug", "urgent"]),
            "/b": WorktreeMetadata(tags=["bug"]),
            "/c": WorktreeMetadata(),
        }
        assert filter_worktrees_by_tags(metadata, ["bug"]) == ["/a", "/b"]
        assert filter_worktrees_by_tags(metadata, ["bug", "urgent"]) == ["/a"]
        assert filter_worktrees_by_tags(metadata, []) == []
