"""Schema migrations for the local todovault store.

Append new migrations to ``ALL_MIGRATIONS`` with the next version number.
"""

from .m001_users_table import users_table_migration
from .m002_todos_owner import todos_owner_migration
from .runner import Migration, MigrationRunner, get_current_version, ordered, run_migrations

ALL_MIGRATIONS: list[Migration] = [
    users_table_migration,
    todos_owner_migration,
]

__all__ = [
    "ALL_MIGRATIONS",
    "Migration",
    "MigrationRunner",
    "get_current_version",
    "ordered",
    "run_migrations",
]
