"""Pydantic models shared across clicomplete modules.

**Registry models** describe what the suggestion engine can offer:
    :class:`ParameterDescriptor`.

**Configuration models** are serialised as JSON in the user's config
directory: :class:`CompletionSettings`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


DEFAULT_BASH_FILE = "/etc/bash_completion.d/clicomplete_applications"
"""System-wide file loaded by bash-completion for every new shell."""


# --- Registry ---


class ParameterDescriptor(BaseModel):
    """One declared parameter of a command action.

    The suggestion engine turns each descriptor into an ``--name`` or
    ``--name=`` suggestion. Only a default of exactly ``False`` produces the
    bare form, since such a parameter is a switch that takes no value.

    Example::

        ParameterDescriptor(name="verbose", has_default=True, default=False)
        ParameterDescriptor(name="tag", is_array=True)
    """

    name: str
    has_default: bool = False
    default: Any = None
    is_array: bool = Field(
        default=False,
        description="Repeated parameter that may be supplied several times",
    )

    @property
    def is_switch(self) -> bool:
        """Whether the parameter takes no value (declared default is ``False``)."""
        return self.has_default and self.default is False


# --- Settings ---


class CompletionSettings(BaseModel):
    """Settings for the completion script and the query command.

    Persisted as ``config.json`` in the clicomplete config directory. The
    ``bash_file`` can also be overridden with ``CLICOMPLETE_BASH_FILE``.
    """

    bash_file: str = Field(
        default=DEFAULT_BASH_FILE,
        description="Completion script loaded by bash for registered programs",
    )
    function_name: str = Field(
        default="_clicomplete_console_application",
        description="Name of the shared bash completion function",
    )
    query_command: str = Field(
        default="complete",
        description="Sub-command the bash function pipes the command line into",
    )
    builtin_commands: list[str] = Field(
        default_factory=lambda: ["help"],
        description="Command names offered in addition to the registry",
    )
