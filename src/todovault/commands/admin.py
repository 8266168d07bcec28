"""Administrative database viewer commands."""

import json
from pathlib import Path

import typer
from rich.panel import Panel

from todovault.commands.decorators import AppError, command_wrapper, ensure_success
from todovault.services.app_context import get_app_context
from todovault.utils.exit_codes import ERROR_GENERAL, ERROR_PERMISSION_DENIED
from todovault.utils.typer_helpers import SuggestingGroup
from todovault.utils.ui.console import get_console
from todovault.utils.ui.formatters import (
    format_info,
    format_success,
    format_warning,
    schema_table,
    todos_table,
    users_table,
)

app = typer.Typer(cls=SuggestingGroup, help="Database viewer and maintenance")
console = get_console()


def _password_option(help_text: str = "Admin password"):
    return typer.Option(..., "--password", prompt=True, hide_input=True, help=help_text)


@app.command("info")
@command_wrapper
async def info(
    output_json: bool = typer.Option(False, "--json", help="Print JSON"),
) -> None:
    """Show database location, tables and record counts."""
    ctx = get_app_context()
    store_info = await ctx.diagnostics.get_info()
    version = await ctx.store.schema_version()

    if output_json:
        data = store_info.model_dump()
        data["schema_version"] = version
        print(json.dumps(data, indent=2))
        return

    body = "\n".join(
        [
            f"[bold]Path:[/bold] {store_info.path}",
            f"[bold]Platform:[/bold] {store_info.platform_hint}",
            f"[bold]Schema version:[/bold] {version}",
            f"[bold]Tables:[/bold] {', '.join(store_info.tables) or '-'}",
            f"[bold]Users:[/bold] {store_info.user_count}",
            f"[bold]Todos:[/bold] {store_info.todo_count}",
            f"[bold]Total records:[/bold] {store_info.total_records}",
            f"[bold]Estimated size:[/bold] ~{store_info.estimated_size_kb} KB",
        ]
    )
    console.print(Panel(body, title="Database Info", expand=False))


@app.command("users")
@command_wrapper
async def users(
    counts: bool = typer.Option(False, "--counts", "-c", help="Include todo counts"),
) -> None:
    """List registered users (passwords are never shown)."""
    repo = get_app_context().users
    rows = await (repo.list_users_with_todo_counts() if counts else repo.list_users())
    if not rows:
        format_info("No users registered")
        return
    console.print(users_table(rows))


@app.command("stats")
@command_wrapper
async def stats() -> None:
    """Show registration statistics."""
    user_stats = await get_app_context().users.get_user_stats()
    recent = user_stats.recent_user
    lines = [
        f"[bold]Total users:[/bold] {user_stats.total_users}",
        f"[bold]Registered today:[/bold] {user_stats.today_users}",
        f"[bold]Registered this week:[/bold] {user_stats.week_users}",
        f"[bold]Most recent:[/bold] {recent.username if recent else '-'}",
        f"[dim]Updated {user_stats.last_updated.isoformat(timespec='seconds')}[/dim]",
    ]
    console.print(Panel("\n".join(lines), title="User Statistics", expand=False))


@app.command("schema")
@command_wrapper
async def schema(
    table: str = typer.Argument("todos", help="Table to describe"),
) -> None:
    """Describe the columns of a table."""
    columns = await get_app_context().diagnostics.describe_table(table)
    if not columns:
        raise AppError(f"Unknown table: {table}", exit_code=ERROR_GENERAL)
    console.print(schema_table(table, columns))


@app.command("todos")
@command_wrapper
async def all_todos() -> None:
    """List every todo of every user."""
    todos = await get_app_context().todos.list_all_todos()
    if not todos:
        format_info("No data in database")
        return
    console.print(todos_table(todos, title=f"All Todos ({len(todos)})", show_owner=True))


@app.command("export")
@command_wrapper
async def export(
    output: str | None = typer.Option(
        None, "--output", "-o", help="Write the dump to a file instead of stdout"
    ),
    password: str = _password_option(),
) -> None:
    """Export schema and data as SQL statements."""
    ctx = get_app_context()
    if not ctx.diagnostics.gate.check(password):
        raise AppError("Incorrect admin password", exit_code=ERROR_PERMISSION_DENIED)

    dump = await ctx.diagnostics.export_as_sql()
    if dump is None:
        raise AppError("Failed to export database", exit_code=ERROR_GENERAL)

    if output is None:
        print(dump, end="")
        return

    Path(output).write_text(dump, encoding="utf-8")
    format_success(f"Database exported to {output}")


@app.command("clear")
@command_wrapper
async def clear(
    include_users: bool = typer.Option(
        False, "--include-users", help="Also delete every user account"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    password: str = _password_option(),
) -> None:
    """Delete all todos (and optionally all users)."""
    scope = "ALL todos and users" if include_users else "ALL todos"
    if not yes and not typer.confirm(
        f"Are you sure you want to delete {scope}? This cannot be undone.",
        default=False,
    ):
        format_info("Cancelled")
        return

    result = await get_app_context().diagnostics.clear_data(
        password, include_users=include_users
    )
    ensure_success(result)
    format_success(f"All data cleared ({result.affected} rows)")


@app.command("reset")
@command_wrapper
async def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    password: str = _password_option(),
) -> None:
    """Drop and recreate the database schema."""
    if not yes:
        format_warning("This will completely reset the database and all data will be lost.")
        if not typer.confirm("Continue?", default=False):
            format_info("Cancelled")
            return

    result = await get_app_context().diagnostics.reset_database(password)
    ensure_success(result)
    format_success("Database reset successfully")
