"""Shell execution for `run` hook steps."""

import os
import subprocess
from pathlib import Path

from wtman.errors import ActionError, CommandFailedError
from wtman.logging import logger
from wtman.settings import get_settings

from .actions import ActionResult

DEFAULT_SHELL = "/bin/sh"


def get_shell() -> str:
    """Shell used for hook commands: WTMAN_SHELL, then $SHELL, then /bin/sh."""
    return get_settings().shell or os.environ.get("SHELL") or DEFAULT_SHELL


def run_step(command: str, working_directory: Path) -> ActionResult:
    """Run a command string as one shell script.

    Output is not captured: the hook's stdout and stderr go straight to the
    terminal.
    """
    shell = get_shell()
    logger.debug(f"Running in {working_directory} with {shell}: {command}")

    try:
        result = subprocess.run(
            [shell, "-c", command],
            cwd=working_directory,
            check=False,
        )
    except OSError as e:
        return ActionResult.failed(ActionError(f"Could not start {shell}: {e}"))

    if result.returncode != 0:
        return ActionResult.failed(CommandFailedError(result.returncode))
    return ActionResult.ok()
