"""Typer application and CLI entry point for clicomplete.

The ``clicomplete`` program is itself a host application for the completion
plugin: it mounts :func:`~clicomplete.completion.create_completion_app` as
``complete`` over a registry of its own commands, so
``clicomplete complete install`` enables tab completion for ``clicomplete``.
It also provides ``config`` commands for the settings file.

Other Typer applications mount the plugin the same way::

    from clicomplete.completion import create_completion_app
    from clicomplete.registry import TyperCommandRegistry

    app.add_typer(create_completion_app(TyperCommandRegistry(app)), name="complete")
"""

from __future__ import annotations

import signal
import sys
from typing import Any

import typer

from clicomplete import __version__
from clicomplete.commands.config import config_app
from clicomplete.completion import create_completion_app
from clicomplete.exit_codes import EXIT_GENERIC_FAILURE
from clicomplete.registry import TyperCommandRegistry


app = typer.Typer(
    name="clicomplete",
    help="Bash completion for Typer console applications.",
    no_args_is_help=True,
    add_completion=False,
)

registry = TyperCommandRegistry(app)

app.add_typer(create_completion_app(registry), name="complete", help="Bash completion.")
app.add_typer(config_app, name="config", help="Settings management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"clicomplete {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~clicomplete.output.OutputManager` built
    from the CLI flags.
    """
    from clicomplete.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``clicomplete`` console script.

    Unhandled :class:`~clicomplete.exceptions.ClicompleteError` instances
    cause a clean exit with the error's ``exit_code``; any other exception
    is reported and exits with :data:`EXIT_GENERIC_FAILURE`.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from clicomplete.exceptions import ClicompleteError
        from clicomplete.output import error

        if isinstance(exc, ClicompleteError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
