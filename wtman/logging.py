"""Logging utilities using rich."""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

# User-facing output; diagnostics from Logger go to stderr
console = Console()


class Logger:
    """Diagnostics on stderr with rich markup and status prefixes."""

    def __init__(self, name: str = "wtman"):
        self.logger = logging.getLogger(name)
        self.configure()

    def configure(self, verbose: bool = False, no_color: bool = False) -> None:
        """Replace the handler; level names are shown only in verbose mode."""
        self.console = Console(stderr=True, no_color=no_color)
        handler = RichHandler(
            console=self.console,
            show_time=False,
            show_path=False,
            show_level=verbose,
            markup=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        self.logger.handlers = [handler]
        self.logger.propagate = False
        self.set_verbose(verbose)

    def set_verbose(self, verbose: bool) -> None:
        self.logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.logger.debug(message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.logger.warning(f"[yellow]⚠[/yellow] {message}", **kwargs)


logger = Logger()
