"""Settings management with XDG paths, atomic writes, and precedence resolution.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.clicomplete/`` on macOS and Windows. See :func:`get_config_dir`.
* **Settings file** -- A single :class:`~clicomplete.models.CompletionSettings`
  JSON file. See :func:`load_settings` and :func:`save_settings`.
* **Precedence resolution** -- :func:`resolve_settings` merges explicit
  overrides, environment variables and the settings file.

All file writes, including the completion script itself, go through
:func:`atomic_write` so readers never observe a half-written file.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from clicomplete.exceptions import ConfigError
from clicomplete.models import CompletionSettings

_APP_NAME = "clicomplete"
_CONFIG_FILENAME = "config.json"

BASH_FILE_ENV = "CLICOMPLETE_BASH_FILE"
"""Environment variable overriding :attr:`CompletionSettings.bash_file`."""


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _config_dir() -> Path:
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CONFIG_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".config"
        return base / _APP_NAME
    return Path.home() / f".{_APP_NAME}"


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/clicomplete/`` (default
    ``~/.config/clicomplete/``). On macOS/Windows: ``~/.clicomplete/``.

    Returns:
        Absolute path to the configuration directory (guaranteed to exist).
    """
    path = _config_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str, mode: Optional[int] = None) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed and the exception propagates.

    Args:
        path: Destination file.
        data: Full new file content.
        mode: Permission bits applied to the file before the rename. When
            ``None`` the temp file's private ``0o600`` mode is kept.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        if mode is not None:
            os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Settings ---


def _settings_path() -> Path:
    """Path to the settings file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_settings() -> CompletionSettings:
    """Load the settings from the config directory.

    Reading never creates the directory, so it is safe on every <TAB>.

    Returns:
        The deserialised :class:`~clicomplete.models.CompletionSettings`.
        If the file does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file cannot be read, contains invalid JSON or
            fails Pydantic validation.
    """
    path = _config_dir() / _CONFIG_FILENAME
    try:
        if not path.is_file():
            return CompletionSettings()
        data = json.loads(path.read_text(encoding="utf-8"))
        return CompletionSettings.model_validate(data)
    except OSError as exc:
        raise ConfigError(f"Cannot read settings at {path}: {exc}") from exc
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid settings at {path}: {exc}") from exc


def save_settings(settings: CompletionSettings) -> None:
    """Persist the settings atomically to disk."""
    data = settings.model_dump(mode="json")
    atomic_write(_settings_path(), json.dumps(data, indent=2) + "\n")


def resolve_settings(bash_file: Optional[str] = None) -> CompletionSettings:
    """Resolve settings with the full precedence chain.

    Precedence (high to low):
        1. Explicit ``bash_file`` argument
        2. ``CLICOMPLETE_BASH_FILE`` environment variable
        3. Settings file (``~/.config/clicomplete/config.json``)
        4. Defaults

    Returns:
        The effective :class:`~clicomplete.models.CompletionSettings`.
    """
    settings = load_settings()

    env_bash_file = os.environ.get(BASH_FILE_ENV)
    if bash_file is not None:
        settings.bash_file = bash_file
    elif env_bash_file:
        settings.bash_file = env_bash_file

    return settings
