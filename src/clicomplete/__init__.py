"""clicomplete -- bash tab completion for Typer console applications.

The package plugs a ``complete`` command group into a host Typer application.
Bash calls that group on every <TAB> press with the current command line, and
the group answers with the command names, action names or ``--option``
suggestions that fit the position being completed. The same group installs
and removes the shared bash completion script for the host program.

Typical workflow::

    myapp complete install      # register myapp in the completion script
    myapp complete uninstall    # remove it again

Modules:
    app: The ``clicomplete`` console script.
    registry: Command/action/parameter declarations consulted for suggestions.
    models: Pydantic models shared across the package.
    config: XDG-aware settings management.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric process exit codes.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"
