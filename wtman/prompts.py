"""Interactive prompts built on inquirer."""

import sys
from typing import Any

import inquirer

from wtman.errors import UserAbort, WtmanError


def _ensure_tty() -> None:
    if not sys.stdin.isatty():
        raise WtmanError(
            "Interactive mode requires a TTY. Pass the worktree name and --force "
            "to run non-interactively."
        )


def select(message: str, choices: list[tuple[str, Any]]) -> Any:
    """Pick one value from (label, value) pairs."""
    _ensure_tty()
    answers = inquirer.prompt([inquirer.List("choice", message=message, choices=choices)])
    if not answers:
        raise UserAbort("Cancelled")
    return answers["choice"]


def confirm(message: str, default: bool = False) -> bool:
    """Ask a yes/no question."""
    _ensure_tty()
    answers = inquirer.prompt([inquirer.Confirm("confirm", message=message, default=default)])
    if not answers:
        raise UserAbort("Cancelled")
    return bool(answers["confirm"])
