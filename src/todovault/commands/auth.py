"""Account commands: register, login, logout, whoami."""

import typer

from todovault.commands.decorators import AppError, command_wrapper, ensure_success
from todovault.services.app_context import get_app_context
from todovault.utils.exit_codes import ERROR_GENERAL
from todovault.utils.ui.console import get_console
from todovault.utils.ui.formatters import format_info, format_success

console = get_console()


@command_wrapper
async def register(
    username: str = typer.Option(..., "--username", "-u", prompt=True, help="Username"),
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Email address"),
    password: str = typer.Option(
        ...,
        "--password",
        "-p",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Password (at least 6 characters)",
    ),
) -> None:
    """Create an account and log in."""
    result = await get_app_context().auth.register(username, email, password)
    ensure_success(result)
    format_success(f"Account created. Logged in as [cyan]{result.user.username}[/cyan]")


@command_wrapper
async def login(
    username: str = typer.Option(..., "--username", "-u", prompt=True, help="Username"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Password"
    ),
) -> None:
    """Log in to an existing account."""
    result = await get_app_context().auth.login(username, password)
    ensure_success(result)
    format_success(f"Logged in as [cyan]{result.user.username}[/cyan]")


@command_wrapper
def logout() -> None:
    """Log out of the current account."""
    ctx = get_app_context()
    if not ctx.auth.is_logged_in():
        format_info("Not logged in")
        return
    result = ctx.auth.logout()
    if not result.success:
        raise AppError(result.error or "Logout failed", ERROR_GENERAL)
    format_success("Logged out")


@command_wrapper(login_required=True)
def whoami() -> None:
    """Show the logged-in user."""
    user = get_app_context().auth.get_current_user()
    console.print(f"[bold]{user.username}[/bold] <{user.email}> (id {user.id})")
