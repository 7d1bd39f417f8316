"""Completion command group -- answer queries and manage the completion script.

:func:`create_completion_app` builds the Typer group a host application
mounts under the name the bash function pipes into (``complete`` by
default)::

    app.add_typer(create_completion_app(TyperCommandRegistry(app)), name="complete")

Sub-commands:

* ``complete`` / ``complete index`` -- read a completion query from stdin
  and print the suggestions. Bash calls the bare group on every <TAB>.
* ``complete install`` -- register the program in the completion script.
* ``complete uninstall`` -- remove the program from the completion script.
* ``complete show`` -- print the script that ``install`` would write.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, NoReturn, Optional, TextIO

import typer

from clicomplete.completion.advisor import CompletionAdvisor
from clicomplete.completion.script import CompletionScript
from clicomplete.exceptions import ClicompleteError
from clicomplete.models import CompletionSettings
from clicomplete.output import debug, error, info, print_data, success, suggest
from clicomplete.registry import CommandRegistry

ExitHandler = Callable[[int], NoReturn]
"""Called with the exit code when an install/uninstall fails."""


def typer_exit(code: int) -> NoReturn:
    """Default :data:`ExitHandler`: stop the Typer invocation with *code*."""
    raise typer.Exit(code=code)


def create_completion_app(
    registry: CommandRegistry,
    settings: Optional[CompletionSettings] = None,
    exit_handler: Optional[ExitHandler] = None,
    stdin: Optional[TextIO] = None,
) -> typer.Typer:
    """Build the completion command group for a host application.

    Args:
        registry: Commands of the host application offered as suggestions.
            Its ``script_name`` is the program installed in the script.
        settings: Script location and names. Resolved from the environment
            and the settings file when omitted (see
            :func:`~clicomplete.config.resolve_settings`).
        exit_handler: Invoked with the exit code after an error has been
            reported. Defaults to :func:`typer_exit`.
        stdin: Stream the completion query is read from. Defaults to
            ``sys.stdin`` at call time.

    Returns:
        A :class:`typer.Typer` group to mount with ``add_typer``.
    """
    on_exit = exit_handler or typer_exit
    completion_app = typer.Typer(help="Bash completion for this program.")

    def _settings() -> CompletionSettings:
        if settings is not None:
            return settings
        from clicomplete.config import resolve_settings

        return resolve_settings()

    def _query() -> None:
        stream = stdin if stdin is not None else sys.stdin
        raw = stream.read()
        debug(f"Completion query: {raw.strip()!r}")
        try:
            builtin_commands = _settings().builtin_commands
        except (ClicompleteError, OSError) as exc:
            debug(f"Using default settings: {exc}")
            builtin_commands = CompletionSettings().builtin_commands
        try:
            line = CompletionAdvisor(registry, builtin_commands).complete(raw)
        except Exception as exc:
            # Completion must never break the shell.
            debug(f"Completion failed: {exc}")
            line = " ".join(builtin_commands)
        print_data(line)

    def _writing(path: Path) -> None:
        info(f"Writing config to <{path}>")

    @completion_app.callback(invoke_without_command=True)
    def completion_callback(ctx: typer.Context) -> None:
        """Print completion suggestions for the command line read from stdin."""
        if ctx.invoked_subcommand is None:
            _query()

    @completion_app.command("index")
    def completion_index() -> None:
        """Print completion suggestions for the command line read from stdin.

        The bash completion function pipes the current command line into
        this command as comma-separated words.

        Example::

            echo "myapp,cache," | myapp complete index
        """
        _query()

    @completion_app.command("install")
    def completion_install() -> None:
        """Register this program in the bash completion script.

        Example::

            sudo myapp complete install
        """
        try:
            script = CompletionScript(settings=_settings())
            script.install(registry.script_name, on_write=_writing)
        except ClicompleteError as exc:
            error(str(exc))
            on_exit(exc.exit_code)
            return
        success("Success. Changes will be loaded to new bash sessions.")
        suggest(f"Open a new shell, or run: source {script.path}")

    @completion_app.command("uninstall")
    def completion_uninstall() -> None:
        """Remove this program from the bash completion script.

        Example::

            sudo myapp complete uninstall
        """
        try:
            script = CompletionScript(settings=_settings())
            script.uninstall(registry.script_name, on_write=_writing)
        except ClicompleteError as exc:
            error(str(exc))
            on_exit(exc.exit_code)
            return
        success("Success. Changes will be loaded to new bash sessions.")

    @completion_app.command("show")
    def completion_show() -> None:
        """Print the completion script with this program registered.

        Nothing is written; useful for installing the script by hand.

        Example::

            myapp complete show > ~/.bash_completion.d/myapp
        """
        try:
            script = CompletionScript(settings=_settings())
            programs = [*script.list_registered(), registry.script_name]
        except ClicompleteError as exc:
            error(str(exc))
            on_exit(exc.exit_code)
            return
        print_data(script.render(programs).rstrip("\n"))

    return completion_app
