"""Output formatters for todovault commands."""

from __future__ import annotations

from rich.table import Table

from todovault.models import ColumnInfo, Todo, User, UserWithTodoCounts
from todovault.utils.ui.console import get_console

console = get_console()


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


def _short_date(value) -> str:
    return value.strftime("%Y-%m-%d") if value else "N/A"


def todos_table(todos: list[Todo], title: str = "Todos", show_owner: bool = False) -> Table:
    """Build a table of todos, newest first as given."""
    table = Table(title=title)
    table.add_column("ID", justify="right", style="cyan")
    if show_owner:
        table.add_column("User", justify="right")
    table.add_column("Title")
    table.add_column("Done", justify="center")
    table.add_column("Created")

    for todo in todos:
        row = [str(todo.id)]
        if show_owner:
            row.append(str(todo.user_id))
        row.extend(
            [
                todo.title,
                "[green]✓[/green]" if todo.completed else "[dim]✗[/dim]",
                _short_date(todo.created_at),
            ]
        )
        table.add_row(*row)
    return table


def users_table(users: list[User] | list[UserWithTodoCounts]) -> Table:
    """Build a table of registered users. Digests are never part of the model."""
    with_counts = bool(users) and isinstance(users[0], UserWithTodoCounts)

    table = Table(title="Registered Users")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Username")
    table.add_column("Email")
    table.add_column("Registered")
    if with_counts:
        table.add_column("Todos", justify="right")
        table.add_column("Done", justify="right")
        table.add_column("Pending", justify="right")

    for user in users:
        row = [str(user.id), user.username, user.email, _short_date(user.created_at)]
        if with_counts:
            row.extend(
                [str(user.todo_count), str(user.completed_todos), str(user.pending_todos)]
            )
        table.add_row(*row)
    return table


def schema_table(table_name: str, columns: list[ColumnInfo]) -> Table:
    """Build a table describing a table's columns."""
    table = Table(title=f"Schema: {table_name}")
    table.add_column("Column", style="cyan")
    table.add_column("Type")
    table.add_column("Flags")

    for column in columns:
        flags = []
        if column.pk:
            flags.append("PK")
        if column.not_null:
            flags.append("NOT NULL")
        if column.default is not None:
            flags.append(f"DEFAULT {column.default}")
        table.add_row(column.name, column.type, " ".join(flags))
    return table
