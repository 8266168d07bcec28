"""Migration 002: todos table with a mandatory owner.

Three starting points are handled:
- no todos table: create it with ``userId INTEGER NOT NULL`` and no default;
- a todos table from before per-user ownership (no ``userId`` column): rename it
  to ``todos_old``, create the new table with ``userId`` defaulting to the
  bootstrap user, copy every row across owned by that user and drop the old
  table;
- a todos table that already has ``userId``: nothing to do.

The runner wraps ``up`` in a transaction, so a failed rebuild leaves the legacy
table exactly as it was.
"""

from __future__ import annotations

import sqlite3

from todovault.adapters.sqlite import schema
from todovault.utils.logger import get_logger
from .runner import Migration


class TodosOwnerMigration(Migration):
    """Ensure todos exists and carries a non-null userId."""

    @property
    def version(self) -> int:
        return 2

    @property
    def description(self) -> str:
        return "Create todos table with userId; migrate legacy todos to bootstrap user"

    def up(self, connection: sqlite3.Connection) -> None:
        columns = schema.table_columns(connection, schema.TODOS_TABLE)

        if not columns:
            connection.execute(schema.CREATE_TODOS_TABLE)
            return

        if "userId" in columns:
            return

        logger = get_logger("migrations")
        logger.info("migrating legacy todos table (%d columns)", len(columns))

        copied = [c for c in schema.LEGACY_TODO_COLUMNS if c in columns]
        if "title" not in copied:
            raise RuntimeError("legacy todos table has no title column")

        connection.execute(
            f"ALTER TABLE {schema.TODOS_TABLE} RENAME TO {schema.LEGACY_TODOS_TABLE}"
        )
        connection.execute(schema.CREATE_MIGRATED_TODOS_TABLE)

        column_list = ", ".join(copied)
        # completed may be NULL in old files
        select_list = ", ".join(
            "COALESCE(completed, 0)" if c == "completed" else c for c in copied
        )
        connection.execute(
            f"INSERT INTO {schema.TODOS_TABLE} (userId, {column_list}) "
            f"SELECT ?, {select_list} FROM {schema.LEGACY_TODOS_TABLE}",
            (schema.BOOTSTRAP_USER_ID,),
        )
        connection.execute(f"DROP TABLE {schema.LEGACY_TODOS_TABLE}")

        logger.info("legacy todos migration completed")


todos_owner_migration = TodosOwnerMigration()
