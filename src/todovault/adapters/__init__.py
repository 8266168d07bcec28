"""Adapters module - repository implementations for storage backends.

- sqlite: local SQLite database storage
"""

from .sqlite import SqliteTodoRepository, SqliteUserRepository, Store

__all__ = [
    "Store",
    "SqliteUserRepository",
    "SqliteTodoRepository",
]
