"""Command registries consulted by the suggestion engine.

A host application describes what can be completed through two small
contracts:

* :class:`ConsoleCommand` -- one command: its action names, its default
  action, and the parameters each action declares.
* :class:`CommandRegistry` -- command name to :class:`ConsoleCommand`, plus
  the name of the program being completed.

Two ready-made implementations cover the common cases:

* :class:`StaticCommand` declares actions and parameters explicitly.
* :class:`TyperCommandRegistry` reads the commands, sub-commands and options
  a :class:`typer.Typer` application already declares.

Example::

    registry = CommandRegistry(
        {
            "cache": StaticCommand(
                {
                    "index": [ParameterDescriptor(name="verbose", has_default=True, default=False)],
                    "flush": [ParameterDescriptor(name="tag", is_array=True)],
                }
            ),
        },
        script_name="myapp",
    )
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import typer
from typer.main import get_command

from clicomplete.models import ParameterDescriptor

logger = logging.getLogger(__name__)


class ConsoleCommand(ABC):
    """A command the completion engine can describe.

    Subclasses list their action names and the parameters of each action.
    :attr:`default_action` names the action run when the command is invoked
    without one; ``None`` means the command's own parameters.
    """

    default_action: Optional[str] = "index"

    @abstractmethod
    def list_actions(self) -> list[str]:
        """Return the action names exposed by the command."""
        ...

    @abstractmethod
    def describe_params(self, action: Optional[str]) -> list[ParameterDescriptor]:
        """Return the declared parameters of *action*, in declaration order.

        Unknown actions yield an empty list.
        """
        ...


class StaticCommand(ConsoleCommand):
    """Command whose actions and parameters are declared up front.

    Args:
        actions: Mapping of action name to its ordered parameters.
        default_action: Action used when none is typed on the command line.
    """

    def __init__(
        self,
        actions: Optional[Mapping[str, Sequence[ParameterDescriptor]]] = None,
        default_action: Optional[str] = "index",
    ) -> None:
        self._actions = {name: list(params) for name, params in (actions or {}).items()}
        self.default_action = default_action

    def list_actions(self) -> list[str]:
        return list(self._actions)

    def describe_params(self, action: Optional[str]) -> list[ParameterDescriptor]:
        if action is None:
            return []
        return list(self._actions.get(action, []))


class ClickCommand(ConsoleCommand):
    """Adapter exposing a click command (as built by Typer) as a :class:`ConsoleCommand`.

    Groups expose their sub-commands as actions; leaf commands have none.
    The default action is the command itself, so its own options are
    suggested when no action is typed.

    Commands are read through their attributes rather than class checks:
    recent Typer releases build them on a bundled copy of click whose
    classes are not those of the ``click`` distribution.
    """

    default_action = None

    def __init__(self, command: Any) -> None:
        self._command = command

    def list_actions(self) -> list[str]:
        return [name for name, cmd in _subcommands(self._command).items() if not cmd.hidden]

    def describe_params(self, action: Optional[str]) -> list[ParameterDescriptor]:
        if action is None:
            target = self._command
        else:
            target = _subcommands(self._command).get(action)
        if target is None:
            return []

        params: list[ParameterDescriptor] = []
        for param in target.params:
            descriptor = describe_click_option(param)
            if descriptor is not None:
                params.append(descriptor)
        return params


def _subcommands(command: Any) -> dict[str, Any]:
    """Sub-commands of a click group; empty for a leaf command."""
    return dict(getattr(command, "commands", None) or {})


def describe_click_option(param: Any) -> Optional[ParameterDescriptor]:
    """Convert a click option into a :class:`ParameterDescriptor`.

    Positional arguments, hidden options and options without a ``--long``
    spelling have no ``--name`` form and yield ``None``.

    Boolean flags keep their boolean default, so a flag that is off by
    default is suggested without a trailing ``=``.
    """
    if getattr(param, "param_type_name", None) != "option" or param.hidden:
        return None
    long_opt = next((opt for opt in param.opts if opt.startswith("--")), None)
    if long_opt is None:
        logger.debug("Skipping option %s without a long name", param.opts)
        return None

    name = long_opt[2:]
    if param.is_flag:
        default = param.default if isinstance(param.default, bool) else False
        return ParameterDescriptor(
            name=name, has_default=True, default=default, is_array=param.multiple
        )
    return ParameterDescriptor(
        name=name,
        has_default=param.default is not None,
        default=param.default,
        is_array=param.multiple,
    )


class CommandRegistry:
    """Read-only mapping of command name to :class:`ConsoleCommand`.

    Args:
        commands: The registered commands.
        script_name: Name of the program being completed. Defaults to the
            basename of ``sys.argv[0]``.
    """

    def __init__(
        self,
        commands: Optional[Mapping[str, ConsoleCommand]] = None,
        script_name: Optional[str] = None,
    ) -> None:
        self._commands: Optional[dict[str, ConsoleCommand]] = (
            dict(commands) if commands is not None else None
        )
        self._script_name = script_name

    @property
    def script_name(self) -> str:
        """Basename of the program registered for completion."""
        return self._script_name or Path(sys.argv[0]).name

    @property
    def commands(self) -> dict[str, ConsoleCommand]:
        if self._commands is None:
            self._commands = self._load()
        return self._commands

    def _load(self) -> dict[str, ConsoleCommand]:
        return {}

    def names(self) -> list[str]:
        """Return the registered command names in registration order."""
        return list(self.commands)

    def get(self, name: str) -> Optional[ConsoleCommand]:
        return self.commands.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.commands


class TyperCommandRegistry(CommandRegistry):
    """Registry built from the commands of a :class:`typer.Typer` application.

    The app is converted to click lazily on first use, so commands and
    groups added after the registry is created are still picked up.
    """

    def __init__(self, app: typer.Typer, script_name: Optional[str] = None) -> None:
        super().__init__(script_name=script_name)
        self._app = app

    def _load(self) -> dict[str, ConsoleCommand]:
        commands = _subcommands(get_command(self._app))
        if not commands:
            logger.debug("Typer app has a single command, nothing to register")
        return {
            name: ClickCommand(command)
            for name, command in commands.items()
            if not command.hidden
        }
