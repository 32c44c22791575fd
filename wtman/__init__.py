"""wtman: Git worktree manager with layered config and lifecycle hooks."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("wtman")
except PackageNotFoundError:
    __version__ = "0.0.0"
