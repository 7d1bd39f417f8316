"""Suggestion engine answering bash completion queries.

:class:`CompletionAdvisor` looks at the words typed so far and offers what
may come next:

* no command typed (or an unknown one) -- every command name;
* a command but no valid action -- the command's action names followed by
  the options of its default action. Once an ``--option`` has been typed the
  action names are no longer offered;
* a command and a valid action -- the options of that action.

Options are offered as ``--name=`` or, for switches whose default is
``False``, as ``--name``. An option already on the command line is not
offered again unless it is repeatable.

``bash`` filters the returned words against the word under the cursor with
``compgen -W``, so the engine never has to look at partial input.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from clicomplete.completion.input import parse_input
from clicomplete.models import ParameterDescriptor
from clicomplete.registry import CommandRegistry, ConsoleCommand

logger = logging.getLogger(__name__)

STOP_TOKENS = frozenset({"-", "--"})
"""Words after which nothing is read as a command or action name."""

IGNORED_PARAMS = frozenset({"args"})
"""Parameter names that never become ``--name`` suggestions."""


class CompletionAdvisor:
    """Produces completion suggestions from a :class:`CommandRegistry`.

    The advisor holds no state beyond its constructor arguments, so the same
    query always produces the same suggestions.

    Args:
        registry: The commands available in the host application.
        builtin_commands: Extra command names provided by the host itself
            (for example ``help``) that are not part of the registry.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        builtin_commands: Sequence[str] = ("help",),
    ) -> None:
        self._registry = registry
        self._builtin_commands = tuple(builtin_commands)

    def complete(self, raw: str) -> str:
        """Answer a raw completion query with a space-separated suggestion line."""
        return " ".join(self.suggest(parse_input(raw)))

    def command_names(self) -> list[str]:
        """Return registered command names followed by the builtin ones, without duplicates."""
        return list(dict.fromkeys([*self._registry.names(), *self._builtin_commands]))

    def suggest(self, tokens: Sequence[str]) -> list[str]:
        """Return the suggestions for the parsed words of a command line.

        Args:
            tokens: Words typed after the program name, as returned by
                :func:`~clicomplete.completion.input.parse_input`.
        """
        command_name, action_name, flag_args = split_input(tokens)
        if command_name is None:
            return self.command_names()

        command = self._registry.get(command_name)
        if command is None:
            logger.debug("Unknown command %r, suggesting command names", command_name)
            return self.command_names()

        actions = command.list_actions()
        if action_name is None or action_name not in actions:
            suggestions = self.action_args_suggestions(
                command, command.default_action, flag_args
            )
            if not flag_args:
                suggestions = actions + suggestions
            return suggestions

        return self.action_args_suggestions(command, action_name, flag_args)

    def action_args_suggestions(
        self,
        command: ConsoleCommand,
        action: Optional[str],
        flag_args: Sequence[str] = (),
    ) -> list[str]:
        """Return the ``--option`` suggestions for one action of *command*.

        Args:
            command: The command that owns the action.
            action: Action name, or ``None`` for the command's own options.
            flag_args: ``--option`` words already on the command line.
        """
        suggestions: list[str] = []
        for param in command.describe_params(action):
            if param.name in IGNORED_PARAMS:
                continue
            suggestion = option_suggestion(param)
            if not param.is_array and any(arg.startswith(suggestion) for arg in flag_args):
                continue
            suggestions.append(suggestion)
        return suggestions


def option_suggestion(param: ParameterDescriptor) -> str:
    """Return ``--name`` for switches and ``--name=`` for everything else."""
    suggestion = f"--{param.name}"
    if not param.is_switch:
        suggestion += "="
    return suggestion


def split_input(tokens: Sequence[str]) -> tuple[Optional[str], Optional[str], list[str]]:
    """Pick the command name, action name and ``--option`` words out of *tokens*.

    Scanning stops at a bare ``-`` or ``--``. The first two words that are
    not options are the command and action names; later ones are ignored.

    Returns:
        ``(command_name, action_name, flag_args)``; names are ``None`` when
        absent.
    """
    command_name: Optional[str] = None
    action_name: Optional[str] = None
    flag_args: list[str] = []
    for token in tokens:
        if token in STOP_TOKENS:
            break
        if token.startswith("--"):
            flag_args.append(token)
        elif command_name is None:
            command_name = token
        elif action_name is None:
            action_name = token
    return command_name, action_name, flag_args
