"""Management of the shared bash completion script.

The script holds one completion function shared by every registered program,
followed by one registration block per program::

    _clicomplete_console_application()
    {
        ...
    }

    #Program myapp
    complete -F _clicomplete_console_application myapp

The ``#Program`` marker lines are the only state: :meth:`CompletionScript.list_registered`
reads them back, and every change rewrites the whole file from the template
in ``templates/bash_completion.sh.j2``.
"""

from __future__ import annotations

import logging
import os
import re
import stat
from pathlib import Path
from typing import Callable, Iterable, Optional

from jinja2 import Environment, FileSystemLoader

from clicomplete.config import atomic_write
from clicomplete.exceptions import (
    ClicompleteError,
    PermissionDeniedError,
    WriteFailureError,
)
from clicomplete.models import CompletionSettings

logger = logging.getLogger(__name__)

WriteHook = Callable[[Path], None]
"""Called with the script path just before the script is rewritten."""

TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Directory holding the bash completion script template."""

TEMPLATE_NAME = "bash_completion.sh.j2"

PROGRAM_MARKER = "#Program"
"""Comment prefix identifying a registration block."""

PROGRAM_REGEX = re.compile(r"#Program\s(.*)")

DEFAULT_FILE_MODE = 0o644
"""Mode of a newly created script; bash must be able to read it for every user."""

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=False,
    trim_blocks=True,
    keep_trailing_newline=True,
)
_template = _env.get_template(TEMPLATE_NAME)


class CompletionScript:
    """The completion script file and the programs registered in it.

    Args:
        path: Location of the script. Defaults to ``settings.bash_file``.
        settings: Function and query-command names rendered into the script.
    """

    def __init__(
        self,
        path: Optional[str | Path] = None,
        settings: Optional[CompletionSettings] = None,
    ) -> None:
        self.settings = settings or CompletionSettings()
        self.path = Path(path) if path is not None else Path(self.settings.bash_file)

    def render(self, programs: Iterable[str]) -> str:
        """Render the full script for *programs*, dropping duplicates."""
        return _template.render(
            function_name=self.settings.function_name,
            query_command=self.settings.query_command,
            marker=PROGRAM_MARKER,
            programs=_unique(programs),
        )

    def list_registered(self) -> list[str]:
        """Return the programs registered in the script, in file order.

        A missing file means nothing is registered.

        Raises:
            ClicompleteError: If the file exists but cannot be read.
        """
        if not self.path.is_file():
            return []
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ClicompleteError(f"Cannot read <{self.path}>: {exc}") from exc
        return _unique(match.strip() for match in PROGRAM_REGEX.findall(text))

    def write(self, programs: Iterable[str]) -> None:
        """Replace the script with one registering exactly *programs*.

        The new content is written to a temporary file and renamed over the
        script. An existing script keeps its permission bits.

        Raises:
            WriteFailureError: If the file could not be written.
        """
        content = self.render(programs)
        try:
            mode = DEFAULT_FILE_MODE
            if self.path.is_file():
                mode = stat.S_IMODE(self.path.stat().st_mode)
            atomic_write(self.path, content, mode=mode)
        except OSError as exc:
            raise WriteFailureError(f"Failed to write <{self.path}>: {exc}") from exc
        logger.debug("Wrote %s", self.path)

    def check_write_access(self) -> None:
        """Make sure both the script and its directory are writable.

        Raises:
            PermissionDeniedError: If the script exists and is read-only, or
                its directory does not allow creating the replacement file.
        """
        if (self.path.exists() and not os.access(self.path, os.W_OK)) or not os.access(
            self.path.parent, os.W_OK
        ):
            raise PermissionDeniedError(
                f"Need to be a root or to have write permissions on <{self.path}> file"
            )

    def install(self, program: str, on_write: Optional[WriteHook] = None) -> list[str]:
        """Register *program*, keeping every program already registered.

        *on_write* is called with the script path once the access check has
        passed, right before the file is rewritten.

        Returns:
            The programs registered after the change.
        """
        return self._update([*self._registered_for_update(), program], on_write)

    def uninstall(self, program: str, on_write: Optional[WriteHook] = None) -> list[str]:
        """Unregister *program*. Unknown programs leave the registrations as they are.

        Returns:
            The programs registered after the change.
        """
        programs = [name for name in self._registered_for_update() if name != program]
        return self._update(programs, on_write)

    def _registered_for_update(self) -> list[str]:
        self.check_write_access()
        return self.list_registered()

    def _update(self, programs: Iterable[str], on_write: Optional[WriteHook]) -> list[str]:
        programs = _unique(programs)
        if on_write is not None:
            on_write(self.path)
        self.write(programs)
        return programs


def _unique(names: Iterable[str]) -> list[str]:
    """Drop duplicates and empty names, keeping first-seen order."""
    return list(dict.fromkeys(name for name in names if name))
