"""Exception hierarchy for clicomplete.

All exceptions inherit from :class:`ClicompleteError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`clicomplete.exit_codes`.
The completion commands catch ``ClicompleteError``, print the message and hand
the exit code to the injected exit handler; :func:`clicomplete.app.main` does
the same for anything that escapes a command.

Subclass hierarchy::

    ClicompleteError (exit 1)
    +-- InvalidUsageError      (exit 2)
    +-- PermissionDeniedError  (exit 1)
    +-- WriteFailureError      (exit 1)
    +-- ConfigError            (exit 1)
"""

from clicomplete.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_PERMISSION_DENIED,
    EXIT_WRITE_FAILURE,
)


class ClicompleteError(Exception):
    """Base exception for all clicomplete errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ClicompleteError):
    """Raised for invalid CLI arguments, such as an unknown settings key."""

    exit_code = EXIT_INVALID_USAGE


class PermissionDeniedError(ClicompleteError):
    """Raised when the completion script or its parent directory is not writable.

    Raised before any write is attempted, so the script on disk is left as is.
    """

    exit_code = EXIT_PERMISSION_DENIED


class WriteFailureError(ClicompleteError):
    """Raised when writing the completion script fails."""

    exit_code = EXIT_WRITE_FAILURE


class ConfigError(ClicompleteError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE
