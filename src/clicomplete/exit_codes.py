"""Numeric process exit codes.

Each constant maps to an error category and is referenced by the matching
:class:`~clicomplete.exceptions.ClicompleteError` subclass. The bash
completion function ignores the exit status of a query, so only the
``install``/``uninstall`` paths make use of the failure codes.
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments (e.g. an unknown config key)."""

EXIT_PERMISSION_DENIED = 1
"""The completion script or its directory is not writable."""

EXIT_WRITE_FAILURE = 1
"""Writing the completion script failed."""
