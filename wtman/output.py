"""Formatting and rendering of worktree listings."""

import json
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from wtman.git import WorktreeInfo
from wtman.metadata import WorktreesMetadata


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    TSV = "tsv"


@dataclass(frozen=True)
class WorktreeDisplayInfo:
    """One worktree row as shown to the user."""

    path: str
    branch: str
    is_current: bool
    tags: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, str | bool]:
        return {
            "path": self.path,
            "branch": self.branch,
            "isCurrent": self.is_current,
            "tags": self.tags,
            "description": self.description,
        }


def format_path(absolute_path: Path | str, cwd: Path | str) -> str:
    """Display path: "." for cwd, relative when close by, absolute otherwise."""
    path = os.path.normpath(absolute_path)
    base = os.path.normpath(cwd)
    if path == base:
        return "."

    relative = os.path.relpath(path, base)
    if relative.count("../") >= 3:
        return str(absolute_path)
    return relative


def format_branch(info: WorktreeInfo) -> str:
    """Branch name, or "<date> <subject>" for a detached HEAD."""
    if info.is_detached:
        return f"{info.commit_date} {info.commit_message}"
    return info.branch


def format_worktrees(
    worktrees: list[WorktreeInfo],
    cwd: Path | str,
    metadata: WorktreesMetadata | None = None,
) -> list[WorktreeDisplayInfo]:
    metadata = metadata or {}
    current = os.path.normpath(cwd)
    rows = []
    for info in worktrees:
        entry = metadata.get(str(info.path))
        rows.append(
            WorktreeDisplayInfo(
                path=format_path(info.path, cwd),
                branch=format_branch(info),
                is_current=os.path.normpath(info.path) == current,
                tags=", ".join(entry.tags) if entry else "",
                description=entry.description if entry else "",
            )
        )
    return rows


def render_json(data: list[WorktreeDisplayInfo]) -> str:
    return json.dumps([row.to_dict() for row in data], indent=2)


def render_tsv(data: list[WorktreeDisplayInfo]) -> str:
    """TSV with a header row; branch names are raw for easy parsing."""
    lines = ["Path\tBranch\tCurrent\tTags\tDescription"]
    for row in data:
        current = "current" if row.is_current else "-"
        lines.append(f"{row.path}\t{row.branch}\t{current}\t{row.tags}\t{row.description}")
    return "\n".join(lines)


def render_table(data: list[WorktreeDisplayInfo]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Path", style="cyan")
    table.add_column("Branch", style="green")
    table.add_column("Current")
    table.add_column("Tags", style="yellow")
    table.add_column("Description", style="dim")

    for row in data:
        table.add_row(
            escape(row.path),
            escape(row.branch),
            "(current)" if row.is_current else "-",
            escape(row.tags),
            escape(row.description),
        )
    return table


def render(data: list[WorktreeDisplayInfo], output_format: OutputFormat, console: Console) -> None:
    output_format = OutputFormat(output_format)
    if output_format == OutputFormat.JSON:
        click.echo(render_json(data))
    elif output_format == OutputFormat.TSV:
        click.echo(render_tsv(data))
    else:
        console.print(render_table(data))
