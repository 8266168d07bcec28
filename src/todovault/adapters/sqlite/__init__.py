"""SQLite adapter module - local database storage implementation."""

from todovault.adapters.sqlite.connection import Store, default_db_path
from todovault.adapters.sqlite.todo_repository import SqliteTodoRepository
from todovault.adapters.sqlite.user_repository import SqliteUserRepository

__all__ = [
    "Store",
    "default_db_path",
    "SqliteUserRepository",
    "SqliteTodoRepository",
]
