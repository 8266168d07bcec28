"""Utility functions for the SQLite adapter."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from todovault.utils.logger import get_logger

ModelT = TypeVar("ModelT", bound=BaseModel)


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary.

    Args:
        row: sqlite3.Row object

    Returns:
        Dictionary with column names as keys
    """
    if row is None:
        return {}
    return dict(row)


def rows_to_models(model: type[ModelT], rows: list[Any], component: str) -> list[ModelT]:
    """Validate *rows* into *model* instances, skipping rows that do not fit.

    Skipped rows are logged under *component* with their id when present.
    """
    items: list[ModelT] = []
    for row in rows:
        data = row_to_dict(row)
        try:
            items.append(model.model_validate(data))
        except ValidationError as e:
            get_logger(component).warning(
                "skipping unreadable %s row id=%s: %s",
                model.__name__,
                data.get("id"),
                e.errors(include_url=False),
            )
    return items


def utc_today() -> str:
    """Current UTC date as ``YYYY-MM-DD`` (the format of ``DATE(createdAt)``)."""
    return datetime.now(UTC).date().isoformat()


def utc_days_ago(days: int) -> str:
    """UTC timestamp *days* ago in SQLite's ``CURRENT_TIMESTAMP`` format."""
    moment = datetime.now(UTC) - timedelta(days=days)
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def sql_literal(value: Any) -> str:
    """Render a value as a SQL literal for a text dump.

    Strings are single-quoted with embedded quotes doubled, bytes become
    X'..' hex literals, None becomes NULL and booleans become 0/1.
    """
    if value is None:
        return "NULL"
    if isinstance(value, (bytes, bytearray, memoryview)):
        return f"X'{bytes(value).hex().upper()}'"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return str(value)
    text = str(value).replace("'", "''")
    return f"'{text}'"
