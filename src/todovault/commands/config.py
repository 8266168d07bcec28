"""Configuration management commands."""

import typer

from todovault.commands.decorators import AppError, command_wrapper
from todovault.services.config_service import get_config_service
from todovault.utils.exit_codes import ERROR_INVALID_ARGS
from todovault.utils.typer_helpers import SuggestingGroup
from todovault.utils.ui.console import get_console
from todovault.utils.ui.formatters import format_success

app = typer.Typer(cls=SuggestingGroup, help="Configuration management")
console = get_console()


@app.command("show")
@command_wrapper
def show() -> None:
    """Show the current configuration."""
    svc = get_config_service()
    console.print(f"[dim]{svc.config_path}[/dim]")
    console.print_json(svc.config.model_dump_json())


@app.command("get")
@command_wrapper
def get(key: str = typer.Argument(..., help="Dotted key, e.g. storage.db_path")) -> None:
    """Get a configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError as e:
        raise AppError(f"Unknown config key: {key}", exit_code=ERROR_INVALID_ARGS) from e
    console.print(value if value is not None else "[dim]<unset>[/dim]")


@app.command("set")
@command_wrapper
def set_value(
    key: str = typer.Argument(..., help="Dotted key, e.g. admin.password"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Set a configuration value."""
    try:
        get_config_service().set(key, value)
    except KeyError as e:
        raise AppError(f"Unknown config key: {key}", exit_code=ERROR_INVALID_ARGS) from e
    except ValueError as e:
        raise AppError(str(e), exit_code=ERROR_INVALID_ARGS) from e
    format_success(f"Set {key}")


@app.command("reset")
@command_wrapper
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes and not typer.confirm("Reset configuration to defaults?", default=False):
        return
    get_config_service().reset_config()
    format_success("Configuration reset to defaults")
