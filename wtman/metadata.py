"""Per-worktree description and tags, stored in the main tree."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, TypeAdapter

from wtman.config.loader import CONFIG_DIR

METADATA_FILENAME = "worktrees.yaml"


class WorktreeMetadata(BaseModel):
    """Metadata attached to one worktree."""

    description: str = ""
    tags: list[str] = Field(default_factory=list)


# Keyed by the absolute path of the worktree
WorktreesMetadata = dict[str, WorktreeMetadata]

_metadata_adapter = TypeAdapter(WorktreesMetadata)


def get_metadata_file_path(main_tree_path: Path) -> Path:
    return main_tree_path / CONFIG_DIR / METADATA_FILENAME


def load_metadata(main_tree_path: Path) -> WorktreesMetadata:
    """Load all worktree metadata. A missing file means no metadata."""
    path = get_metadata_file_path(main_tree_path)
    if not path.exists():
        return {}

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return _metadata_adapter.validate_python(data)


def save_metadata(main_tree_path: Path, metadata: WorktreesMetadata) -> None:
    """Write all worktree metadata, creating the .wtman directory if needed."""
    path = get_metadata_file_path(main_tree_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            _metadata_adapter.dump_python(metadata, mode="json"),
            f,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )


def get_worktree_metadata(
    metadata: WorktreesMetadata, worktree_path: str
) -> WorktreeMetadata | None:
    return metadata.get(worktree_path)


def set_worktree_metadata(
    metadata: WorktreesMetadata, worktree_path: str, data: WorktreeMetadata
) -> WorktreesMetadata:
    """Return a copy of metadata with the entry for worktree_path replaced."""
    return {**metadata, worktree_path: data}


def delete_worktree_metadata(metadata: WorktreesMetadata, worktree_path: str) -> WorktreesMetadata:
    """Return a copy of metadata without worktree_path."""
    return {path: data for path, data in metadata.items() if path != worktree_path}


def parse_tags(value: str) -> list[str]:
    """Split a comma-separated tag string, dropping blanks."""
    return [tag.strip() for tag in value.split(",") if tag.strip()]


def filter_worktrees_by_tags(metadata: WorktreesMetadata, tags: list[str]) -> list[str]:
    """Paths of worktrees carrying every tag in tags."""
    if not tags:
        return []
    return [path for path, data in metadata.items() if all(tag in data.tags for tag in tags)]
