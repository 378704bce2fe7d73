"""Diagnostics output on stderr.

hookline never writes to stdout: stdout belongs to the host application.
Everything this package has to say (request traces, warnings about a
bridge wait that ended early) goes to stderr.

* **Colour control** -- Rich markup unless ``NO_COLOR`` is set,
  ``TERM=dumb``, or ``no_color=True`` is passed.
* **Verbosity** -- :meth:`OutputManager.debug` is silent unless the manager
  is verbose; :meth:`OutputManager.info` is silenced by ``quiet``.

The module exposes two layers:

1. :class:`OutputManager` -- holds the Rich console and the quiet/verbose
   flags.
2. :func:`get_output` / :func:`set_output` / :func:`reset_output` -- manage
   the global instance so callers do not need to pass the manager around.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape

from hookline.config import get_config


class OutputManager:
    """Writes diagnostics to stderr.

    Args:
        no_color: Disable all colour and Rich markup.
        quiet: Suppress informational messages.
        verbose: Enable debug-level messages.
    """

    def __init__(
        self,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
        )

    @property
    def is_quiet(self) -> bool:
        """Whether quiet mode is enabled."""
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        """Whether verbose mode is enabled."""
        return self._verbose

    def info(self, message: str) -> None:
        """Print an informational message. Suppressed by ``quiet``."""
        if not self._quiet:
            if self._no_color:
                print(message, file=sys.stderr, flush=True)
            else:
                self._stderr.print(escape(message))

    def warning(self, message: str) -> None:
        """Print a yellow warning. NOT suppressed by ``quiet``."""
        if self._no_color:
            print(f"Warning: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        """Print a bold-red error. Never suppressed."""
        if self._no_color:
            print(f"Error: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def debug(self, message: str) -> None:
        """Print a debug message. Only shown when verbose.

        Args:
            message: The debug text (prefixed with ``[debug]`` on output).
        """
        if self._verbose:
            if self._no_color:
                print(f"[debug] {message}", file=sys.stderr, flush=True)
            else:
                self._stderr.print(f"[dim]\\[debug] {escape(message)}[/dim]")


def _should_disable_color() -> bool:
    """Return True when NO_COLOR is set (any value) or TERM=dumb."""
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager` instance.

    If none has been installed via :func:`set_output`, one is created
    lazily with verbosity taken from :func:`hookline.config.get_config`.
    """
    global _output
    if _output is None:
        _output = OutputManager(verbose=get_config().verbose)
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager` instance."""
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _output
    _output = None
