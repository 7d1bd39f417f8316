"""Terminal output for clicomplete commands.

Suggestions and ``config show`` data are the only things written to
stdout; ``compgen`` reads the completion line from there. Every status
line, error and hint goes to stderr through a Rich console, or through a
plain ``print`` when colour is off (``NO_COLOR``, ``TERM=dumb`` or
``--no-color``).

Commands call the module-level helpers (:func:`info`, :func:`error`, ...),
which route through the manager installed by the root callback with
:func:`set_output`.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.syntax import Syntax


class OutputFormat(str, Enum):
    """How :meth:`OutputManager.format_response` renders a mapping.

    ``AUTO`` becomes ``RICH`` on a colour-capable TTY and ``PLAIN`` elsewhere.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Routes data to stdout and diagnostics to stderr.

    Args:
        format: Rendering used for :meth:`format_response`.
        no_color: Print diagnostics without Rich styling.
        quiet: Drop info, success and hint lines. Errors are always shown.
        verbose: Show debug lines.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        if format == OutputFormat.AUTO:
            format = OutputFormat.RICH if _is_tty() and not self._no_color else OutputFormat.PLAIN
        self._format = format
        # Streams are looked up per print so test runners can swap them.
        self._stdout = Console(no_color=self._no_color, force_terminal=format == OutputFormat.RICH)
        self._stderr = Console(no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    def print_data(self, text: str) -> None:
        """Write *text* to stdout verbatim."""
        print(text, file=sys.stdout, flush=True)

    def format_response(self, data: dict[str, Any]) -> None:
        """Write *data* to stdout as JSON, ``key<TAB>value`` lines, or highlighted JSON."""
        if self._format == OutputFormat.PLAIN:
            for key, value in data.items():
                self.print_data(f"{key}\t{value}")
            return
        text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        if self._format == OutputFormat.JSON:
            self.print_data(text)
        else:
            self._stdout.print(Syntax(text, "json", theme="monokai", word_wrap=True))

    def info(self, message: str) -> None:
        if not self._quiet:
            self._emit(message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._emit(message, style="green")

    def suggest(self, message: str) -> None:
        if not self._quiet:
            self._emit(f"→ {message}", style="dim")

    def error(self, message: str) -> None:
        """Report a failure. Shown even with ``--quiet``."""
        self._emit(message, prefix="Error:", prefix_style="bold red")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._emit(f"[debug] {message}", style="dim")

    def _emit(
        self,
        message: str,
        style: Optional[str] = None,
        prefix: Optional[str] = None,
        prefix_style: Optional[str] = None,
    ) -> None:
        if self._no_color:
            line = f"{prefix} {message}" if prefix else message
            print(line, file=sys.stderr, flush=True)
            return
        if prefix:
            self._stderr.print(prefix, style=prefix_style, end=" ", markup=False)
        self._stderr.print(message, style=style, markup=False)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set to anything or ``TERM`` is ``dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


_output: Optional[OutputManager] = None


def _manager() -> OutputManager:
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* for the module-level helpers."""
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager; the next helper call builds a default one."""
    global _output
    _output = None


def print_data(text: str) -> None:
    _manager().print_data(text)


def format_response(data: dict[str, Any]) -> None:
    _manager().format_response(data)


def info(message: str) -> None:
    _manager().info(message)


def success(message: str) -> None:
    _manager().success(message)


def suggest(message: str) -> None:
    _manager().suggest(message)


def error(message: str) -> None:
    _manager().error(message)


def debug(message: str) -> None:
    _manager().debug(message)
