"""Shared test fixtures for clicomplete.

Provides reusable fixtures for isolated settings, output state, a sample
command registry, a Typer host application, and the CLI runner. These
fixtures are discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pytest
import typer

from clicomplete.completion import create_completion_app
from clicomplete.models import CompletionSettings, ParameterDescriptor
from clicomplete.output import reset_output
from clicomplete.registry import CommandRegistry, StaticCommand, TyperCommandRegistry


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _plain_output(monkeypatch: pytest.MonkeyPatch) -> None:
    """Force uncoloured output and reset the global OutputManager after every test.

    Without colour the manager prints plain lines, so assertions are not
    affected by Rich's line wrapping.
    """
    monkeypatch.setenv("NO_COLOR", "1")
    reset_output()
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate settings to a temporary directory.

    Points XDG_CONFIG_HOME below tmp_path, clears CLICOMPLETE_* environment
    variables and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("clicomplete.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("CLICOMPLETE_BASH_FILE", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def bash_file(tmp_path: Path) -> Path:
    """Location of a completion script inside a writable temporary directory."""
    directory = tmp_path / "bash_completion.d"
    directory.mkdir()
    return directory / "applications"


@pytest.fixture
def settings(bash_file: Path) -> CompletionSettings:
    """Settings pointing the completion script at :func:`bash_file`."""
    return CompletionSettings(bash_file=str(bash_file))


# ---------------------------------------------------------------------------
# Registry fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def static_registry() -> CommandRegistry:
    """Registry with a ``build`` command and a ``migrate`` command.

    ``build`` has the actions ``index`` (its default), ``clean`` and
    ``deploy``; ``migrate`` has no actions besides its default.
    """
    return CommandRegistry(
        {
            "build": StaticCommand(
                {
                    "index": [
                        ParameterDescriptor(name="verbose", has_default=True, default=False),
                        ParameterDescriptor(name="target"),
                        ParameterDescriptor(name="args"),
                    ],
                    "clean": [
                        ParameterDescriptor(name="all", has_default=True, default=False),
                    ],
                    "deploy": [
                        ParameterDescriptor(name="env", has_default=True, default="prod"),
                        ParameterDescriptor(name="tag", is_array=True),
                        ParameterDescriptor(name="dry", has_default=True, default=0),
                    ],
                }
            ),
            "migrate": StaticCommand(
                {"index": [ParameterDescriptor(name="step", has_default=True, default=1)]}
            ),
        },
        script_name="myapp",
    )


def _build_host_app() -> typer.Typer:
    host = typer.Typer()
    cache = typer.Typer()

    @cache.callback(invoke_without_command=True)
    def cache_main(
        verbose: bool = typer.Option(False, "--verbose", help="Show details."),
    ) -> None:
        """Cache maintenance."""

    @cache.command("flush")
    def cache_flush(
        tag: Optional[List[str]] = typer.Option(None, "--tag", help="Tag to flush."),
        force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
    ) -> None:
        """Flush cached entries."""

    @cache.command("warm")
    def cache_warm(
        limit: int = typer.Option(10, "--limit", help="Entries to warm."),
        name: str = typer.Argument(..., help="Cache name."),
    ) -> None:
        """Warm a cache."""

    @host.command("serve")
    def serve(
        port: int = typer.Option(8000, "--port", help="Port to bind."),
        reload: bool = typer.Option(False, "--reload", help="Reload on changes."),
        secret: str = typer.Option("", "--secret", hidden=True),
    ) -> None:
        """Run the server."""

    @host.command("legacy", hidden=True)
    def legacy() -> None:
        """Hidden command."""

    host.add_typer(cache, name="cache")
    return host


@pytest.fixture
def host_app(settings: CompletionSettings) -> typer.Typer:
    """Typer host application with the completion group mounted as ``complete``."""
    host = _build_host_app()
    registry = TyperCommandRegistry(host, script_name="hostapp")
    host.add_typer(create_completion_app(registry, settings=settings), name="complete")
    return host


@pytest.fixture
def typer_registry() -> TyperCommandRegistry:
    """Registry over the host application without the completion group."""
    return TyperCommandRegistry(_build_host_app(), script_name="hostapp")


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
