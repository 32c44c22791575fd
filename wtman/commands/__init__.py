"""Command modules for wtman."""

from wtman.commands.add import add
from wtman.commands.list import list_command
from wtman.commands.remove import remove

__all__ = ["add", "list_command", "remove"]
