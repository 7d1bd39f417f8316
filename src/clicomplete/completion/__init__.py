"""Bash completion for Typer applications.

* :mod:`~clicomplete.completion.input` -- parsing of the completion query.
* :mod:`~clicomplete.completion.advisor` -- the suggestion engine.
* :mod:`~clicomplete.completion.script` -- the shared completion script file.
* :mod:`~clicomplete.completion.plugin` -- the ``complete`` command group.

The main export is :func:`create_completion_app`, which a host application
mounts with ``add_typer``.
"""

from clicomplete.completion.advisor import CompletionAdvisor
from clicomplete.completion.input import parse_input
from clicomplete.completion.plugin import ExitHandler, create_completion_app
from clicomplete.completion.script import CompletionScript

__all__ = [
    "CompletionAdvisor",
    "CompletionScript",
    "ExitHandler",
    "create_completion_app",
    "parse_input",
]
