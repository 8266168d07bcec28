"""Main entry point for the todovault CLI."""

import typer

from todovault import __version__
from todovault.commands import admin, auth, config, todos
from todovault.utils.exit_codes import exit_codes_epilog
from todovault.utils.typer_helpers import SuggestingGroup
from todovault.utils.ui.console import get_console

app = typer.Typer(
    name="todovault",
    cls=SuggestingGroup,
    help="A local-first to-do tracker backed by an embedded SQLite vault",
    epilog=exit_codes_epilog(),
    no_args_is_help=True,
)

console = get_console()

# Account commands
app.command("register")(auth.register)
app.command("login")(auth.login)
app.command("logout")(auth.logout)
app.command("whoami")(auth.whoami)

# Todo commands
app.command("add")(todos.add)
app.command("list")(todos.list_todos)
app.command("done")(todos.done)
app.command("undo")(todos.undo)
app.command("delete")(todos.delete)

# Subcommands
app.add_typer(admin.app, name="admin", help="Database viewer and maintenance")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]todovault[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
