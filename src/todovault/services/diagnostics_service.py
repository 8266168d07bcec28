"""Read-only diagnostics and SQL export for the administrative viewer.

Every read degrades to an empty or zeroed value instead of raising, since it
backs a display. Destructive operations go through the admin gate.
"""

from __future__ import annotations

import math
import platform
import re
import sqlite3
from datetime import UTC, datetime

from platformdirs import user_data_dir

from todovault.adapters.sqlite import schema
from todovault.adapters.sqlite.connection import Store
from todovault.adapters.sqlite.utils import sql_literal
from todovault.models import ColumnInfo, ErrorKind, OperationResult, StoreInfo
from todovault.repositories import TodoRepository, UserRepository
from todovault.services.admin_gate import AdminGate
from todovault.utils.logger import get_logger

# Coarse size estimate per stored record
RECORD_WEIGHT_KB = 0.5
UNAVAILABLE_PATH = "<unavailable>"

# Exported columns; the password digest is never part of an export
EXPORT_USER_COLUMNS = ["username", "email", "createdAt"]
EXPORT_TODO_COLUMNS = ["userId", "title", "completed", "createdAt"]


def platform_hint() -> str:
    """Where the OS keeps application data, for display next to the path."""
    system = platform.system() or "Unknown"
    return f"{system}: application data lives under {user_data_dir('todovault')}"


def estimate_size_kb(total_records: int) -> int:
    """Records times a fixed per-record weight, rounded up, at least 1."""
    return max(1, math.ceil(total_records * RECORD_WEIGHT_KB))


_CREATE_TABLE = re.compile(r"^\s*CREATE\s+TABLE(?!\s+IF\s+NOT\s+EXISTS\b)\s+", re.IGNORECASE)


def replayable_create(sql: str) -> str:
    """Add IF NOT EXISTS to a stored CREATE TABLE statement.

    sqlite_master keeps the statement without it, and a dump must also load
    into a store that has just been opened or reset.
    """
    return _CREATE_TABLE.sub("CREATE TABLE IF NOT EXISTS ", sql, count=1)


class DiagnosticsService:
    """Aggregates store metadata and serializes the data as SQL."""

    def __init__(
        self,
        store: Store,
        user_repository: UserRepository,
        todo_repository: TodoRepository,
        admin_gate: AdminGate,
    ):
        self.store = store
        self.users = user_repository
        self.todos = todo_repository
        self.gate = admin_gate

    def _table_names(self, connection: sqlite3.Connection) -> list[str]:
        rows = connection.execute(
            "SELECT name FROM sqlite_master "
            "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
        ).fetchall()
        return [row[0] for row in rows]

    async def get_info(self) -> StoreInfo:
        """Location, table names, record counts and a size estimate."""
        hint = platform_hint()
        connection = await self.store.open()
        if connection is None:
            return StoreInfo(path=UNAVAILABLE_PATH, platform_hint=hint)

        try:
            tables = self._table_names(connection)
        except sqlite3.Error as e:
            get_logger("diagnostics").error("error reading table names: %s", e)
            return StoreInfo(path=self.store.location, platform_hint=hint)

        user_count = await self.users.get_user_count()
        todo_count = await self.todos.count_todos()
        total = user_count + todo_count
        return StoreInfo(
            path=self.store.location,
            platform_hint=hint,
            tables=tables,
            user_count=user_count,
            todo_count=todo_count,
            total_records=total,
            estimated_size_kb=estimate_size_kb(total),
        )

    async def describe_table(self, table: str) -> list[ColumnInfo]:
        """Column layout of one table; [] for unknown tables or on failure."""
        connection = await self.store.open()
        if connection is None:
            return []
        try:
            if table not in self._table_names(connection):
                return []
            rows = connection.execute(f"PRAGMA table_info({table})").fetchall()
        except sqlite3.Error as e:
            get_logger("diagnostics").error("error describing table %s: %s", table, e)
            return []
        return [
            ColumnInfo(
                name=row["name"],
                type=row["type"] or "",
                not_null=bool(row["notnull"]),
                default=row["dflt_value"],
                pk=bool(row["pk"]),
            )
            for row in rows
        ]

    async def export_as_sql(self) -> str | None:
        """Dump schema and data as SQL statements.

        Users are exported without their digest; an empty placeholder fills the
        NOT NULL password column so the dump replays cleanly. Returns None on
        any failure rather than a partial dump.
        """
        connection = await self.store.open()
        if connection is None:
            return None

        try:
            lines = [
                "-- todovault database export",
                f"-- Generated: {datetime.now(UTC).isoformat()}",
                f"-- Source: {self.store.location}",
                "",
            ]

            for table in schema.DATA_TABLES:
                row = connection.execute(
                    "SELECT sql FROM sqlite_master WHERE type = 'table' AND name = ?",
                    (table,),
                ).fetchone()
                if row is None or row[0] is None:
                    raise RuntimeError(f"table {table} is missing")
                lines.append(f"{replayable_create(row[0])};")
                lines.append("")

            user_columns = ", ".join(EXPORT_USER_COLUMNS)
            for row in connection.execute(
                f"SELECT {user_columns} FROM users ORDER BY id"
            ).fetchall():
                values = [sql_literal(row["username"]), sql_literal(row["email"]), "''"]
                values.append(sql_literal(row["createdAt"]))
                lines.append(
                    "INSERT INTO users (username, email, password, createdAt) "
                    f"VALUES ({', '.join(values)});"
                )

            todo_columns = ", ".join(EXPORT_TODO_COLUMNS)
            for row in connection.execute(
                f"SELECT {todo_columns} FROM todos ORDER BY id"
            ).fetchall():
                values = ", ".join(sql_literal(row[c]) for c in EXPORT_TODO_COLUMNS)
                lines.append(f"INSERT INTO todos ({todo_columns}) VALUES ({values});")
        except (sqlite3.Error, RuntimeError) as e:
            get_logger("diagnostics").error("error exporting database: %s", e)
            return None

        return "\n".join(lines) + "\n"

    async def clear_data(
        self, admin_password: str | None, include_users: bool = False
    ) -> OperationResult:
        """Delete all todos (and all users when *include_users* is set)."""
        if not self.gate.check(admin_password):
            return self.gate.denied()
        return await self.todos.clear_all(include_users=include_users)

    async def reset_database(self, admin_password: str | None) -> OperationResult:
        """Drop and recreate the schema."""
        if not self.gate.check(admin_password):
            return self.gate.denied()
        if not await self.store.reset():
            return OperationResult.fail(
                ErrorKind.STORE_UNAVAILABLE, "Failed to reset database"
            )
        return OperationResult(success=True)
