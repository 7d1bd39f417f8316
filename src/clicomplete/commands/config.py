"""Config commands -- view and modify completion settings.

Provides the ``clicomplete config`` sub-command group for reading, updating
and resetting the settings file (:class:`~clicomplete.models.CompletionSettings`).
The settings choose where the completion script lives and which names are
rendered into it.
"""

from __future__ import annotations

import typer

from clicomplete.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the effective settings.

    Prints the config directory path followed by the settings after
    environment overrides have been applied.

    Example::

        clicomplete config show
        clicomplete --json config show
    """
    from clicomplete.config import get_config_dir, resolve_settings

    settings = resolve_settings()
    info(f"Config directory: {get_config_dir()}")
    format_response(settings.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Settings key (e.g. 'bash_file')."),
    value: str = typer.Argument(help="Value to set. Lists are comma-separated."),
) -> None:
    """Set a settings value.

    List settings such as ``builtin_commands`` take a comma-separated value.
    The updated settings are validated before saving.

    Raises:
        typer.Exit: With code 2 if the key is unknown or validation fails.

    Example::

        clicomplete config set bash_file ~/.bash_completion.d/apps
        clicomplete config set builtin_commands help,list
    """
    from clicomplete.config import load_settings, save_settings
    from clicomplete.models import CompletionSettings

    data = load_settings().model_dump(mode="json")
    if key not in data:
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=2)

    coerced: object = value
    if isinstance(data[key], list):
        coerced = [item.strip() for item in value.split(",") if item.strip()]
    data[key] = coerced

    try:
        settings = CompletionSettings.model_validate(data)
    except ValueError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None

    save_settings(settings)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Reset settings to defaults.

    Asks for confirmation unless ``--force`` is given.

    Example::

        clicomplete config reset --force
    """
    from clicomplete.config import save_settings
    from clicomplete.models import CompletionSettings

    if not force and not typer.confirm("Reset all settings to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_settings(CompletionSettings())
    success("Settings reset to defaults.")
