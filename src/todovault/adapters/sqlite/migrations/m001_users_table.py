"""Migration 001: create the users table."""

import sqlite3

from todovault.adapters.sqlite import schema
from .runner import Migration


class UsersTableMigration(Migration):
    """Create the users table if it does not exist yet."""

    @property
    def version(self) -> int:
        return 1

    @property
    def description(self) -> str:
        return "Create users table"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute(schema.CREATE_USERS_TABLE)


users_table_migration = UsersTableMigration()
