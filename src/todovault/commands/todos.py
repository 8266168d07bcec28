"""Todo commands for the logged-in user: add, list, done, undo, delete."""

import json

import typer

from todovault.commands.decorators import AppError, command_wrapper, ensure_success
from todovault.services.app_context import get_app_context
from todovault.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from todovault.utils.ui.console import get_console
from todovault.utils.ui.formatters import format_info, format_success, todos_table

console = get_console()


@command_wrapper(login_required=True)
async def add(
    title: str = typer.Argument(..., help="Todo title (may span several lines)"),
) -> None:
    """Add a todo."""
    result = await get_app_context().todo_service.add_todo(title)
    ensure_success(result)
    format_success(f"Todo added (id {result.inserted_id})")


@command_wrapper(login_required=True)
async def list_todos(
    status: str = typer.Option(
        "all", "--status", "-s", help="Filter: all, active or completed"
    ),
    output_json: bool = typer.Option(False, "--json", help="Print JSON"),
) -> None:
    """List your todos, newest first."""
    if status not in ("all", "active", "completed"):
        raise AppError(f"Unknown status filter: {status}", exit_code=ERROR_INVALID_ARGS)

    todos = await get_app_context().todo_service.get_todos()
    if status == "active":
        todos = [t for t in todos if not t.completed]
    elif status == "completed":
        todos = [t for t in todos if t.completed]

    if output_json:
        print(json.dumps([t.model_dump(mode="json") for t in todos], indent=2))
        return

    if not todos:
        format_info("No todos yet. Add one with 'todovault add'.")
        return

    done = sum(1 for t in todos if t.completed)
    console.print(todos_table(todos, title=f"Todos ({done}/{len(todos)} done)"))


async def _set_completed(todo_id: int, completed: bool) -> None:
    result = await get_app_context().todo_service.update_todo_status(todo_id, completed)
    ensure_success(result)
    if result.affected == 0:
        raise AppError(f"Todo not found: {todo_id}", exit_code=ERROR_NOT_FOUND)


@command_wrapper(login_required=True)
async def done(todo_id: int = typer.Argument(..., help="Todo ID")) -> None:
    """Mark a todo as completed."""
    await _set_completed(todo_id, True)
    format_success(f"Todo {todo_id} completed")


@command_wrapper(login_required=True)
async def undo(todo_id: int = typer.Argument(..., help="Todo ID")) -> None:
    """Mark a todo as not completed."""
    await _set_completed(todo_id, False)
    format_success(f"Todo {todo_id} reopened")


@command_wrapper(login_required=True)
async def delete(
    todo_id: int = typer.Argument(..., help="Todo ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a todo."""
    if not yes and not typer.confirm(
        f"Are you sure you want to delete todo {todo_id}?", default=False
    ):
        format_info("Cancelled")
        return

    result = await get_app_context().todo_service.delete_todo(todo_id)
    ensure_success(result)
    if result.affected == 0:
        raise AppError(f"Todo not found: {todo_id}", exit_code=ERROR_NOT_FOUND)
    format_success(f"Todo {todo_id} deleted")
