"""Decorators and helpers shared by command functions."""

import asyncio
import functools
import inspect
import sqlite3
import time
import traceback
from collections.abc import Callable

import typer

from todovault.models import Result, User
from todovault.services.app_context import get_app_context
from todovault.utils.exit_codes import (
    ERROR_AUTH_FAILURE,
    ERROR_GENERAL,
    ERROR_STORE_UNAVAILABLE,
    exit_code_for,
)
from todovault.utils.logger import get_logger
from todovault.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


def ensure_success(result: Result) -> None:
    """Raise AppError carrying the result's message when it failed."""
    if not result.success:
        raise AppError(result.error or "Operation failed", exit_code_for(result.kind))


def require_user() -> User:
    """Current session user, or AppError when nobody is logged in."""
    user = get_app_context().auth.get_current_user()
    if user is None:
        raise AppError(
            "Not logged in. Use 'todovault login' to authenticate.",
            exit_code=ERROR_AUTH_FAILURE,
        )
    return user


def _fail(cmd: str, start: float, message: str, exit_code: int, detail: str = "") -> typer.Exit:
    """Log a failed command, print *message* and build the Exit to raise."""
    elapsed = time.monotonic() - start
    get_logger("cli").error(
        "command failed: %s (%.3fs) - %s%s", cmd, elapsed, message, detail
    )
    format_error(message)
    return typer.Exit(code=exit_code)


def command_wrapper(_func: Callable | None = None, *, login_required: bool = False):
    """Run a command function, sync or async, and turn failures into exit codes.

    ``AppError`` keeps its own exit code. A cancelled prompt exits 1 with
    "Aborted.", a stray sqlite error reports the store as unavailable, and
    anything else is logged with its traceback and exits 1.
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            cmd = func.__name__
            start = time.monotonic()
            get_logger("cli").info("command started: %s", cmd)
            try:
                if login_required:
                    require_user()
                if inspect.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)
            except typer.Exit:
                raise
            except AppError as e:
                raise _fail(cmd, start, str(e), e.exit_code) from e
            except (typer.Abort, KeyboardInterrupt) as e:
                raise _fail(cmd, start, "Aborted.", ERROR_GENERAL) from e
            except sqlite3.Error as e:
                raise _fail(
                    cmd, start, f"Database error: {e}", ERROR_STORE_UNAVAILABLE
                ) from e
            except Exception as e:
                raise _fail(
                    cmd,
                    start,
                    f"An unexpected error occurred: {e}",
                    ERROR_GENERAL,
                    "\n" + traceback.format_exc(),
                ) from e

            get_logger("cli").info(
                "command completed: %s (%.3fs)", cmd, time.monotonic() - start
            )
            return result

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
