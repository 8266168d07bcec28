"""Versioned, forward-only schema migrations.

Applied versions are recorded in ``schema_version``; the highest one is also
mirrored into ``PRAGMA user_version`` so the sqlite3 shell can report it.
Each migration runs in its own transaction and leaves no trace if it fails.
"""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import UTC, datetime

from todovault.adapters.sqlite.schema import CREATE_SCHEMA_VERSION_TABLE
from todovault.utils.logger import get_logger


class Migration(ABC):
    """One schema step.

    ``up`` inspects the schema and only changes what is missing, so files
    created before version tracking existed can replay the whole list.
    It runs inside an open transaction and must not commit.
    """

    @property
    @abstractmethod
    def version(self) -> int:
        """Sequential version number, starting at 1."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of the migration."""

    @abstractmethod
    def up(self, connection: sqlite3.Connection) -> None: ...

    def __repr__(self) -> str:
        return f"<Migration {self.version}: {self.description}>"


def ordered(migrations: Iterable[Migration]) -> list[Migration]:
    """Sort *migrations* by version, rejecting duplicate versions."""
    result = sorted(migrations, key=lambda m: m.version)
    for prev, cur in zip(result, result[1:]):
        if prev.version == cur.version:
            raise ValueError(f"Duplicate migration version {cur.version}")
    return result


class MigrationRunner:
    """Applies migrations to one connection."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        self.connection.execute(CREATE_SCHEMA_VERSION_TABLE)
        self.connection.commit()

    def get_current_version(self) -> int:
        """Highest applied version, 0 when nothing has run."""
        row = self.connection.execute("SELECT MAX(version) FROM schema_version").fetchone()
        return row[0] if row[0] is not None else 0

    def pending(self, migrations: Iterable[Migration]) -> list[Migration]:
        """Migrations newer than the current version, in the order they apply.

        Raises:
            ValueError: On duplicate versions or a gap after the current version
        """
        current = self.get_current_version()
        todo = [m for m in ordered(migrations) if m.version > current]
        expected = current + 1
        for migration in todo:
            if migration.version != expected:
                raise ValueError(
                    f"Migration {expected} is missing (next available is {migration.version})"
                )
            expected += 1
        return todo

    def run_migration(self, migration: Migration) -> None:
        """Run a single migration atomically.

        Raises:
            ValueError: If the version is not greater than the current version
            RuntimeError: If the migration fails (the transaction is rolled back)
        """
        current = self.get_current_version()
        if migration.version <= current:
            raise ValueError(
                f"Migration version {migration.version} is not greater than "
                f"current version {current}"
            )

        logger = get_logger("migrations")
        logger.info("applying migration %s: %s", migration.version, migration.description)

        # DDL does not open an implicit transaction
        if not self.connection.in_transaction:
            self.connection.execute("BEGIN")
        try:
            migration.up(self.connection)
            self.connection.execute(
                "INSERT INTO schema_version (version, description, applied_at) "
                "VALUES (?, ?, ?)",
                (migration.version, migration.description, datetime.now(UTC).isoformat()),
            )
            self.connection.execute(f"PRAGMA user_version = {int(migration.version)}")
            self.connection.commit()
        except Exception as e:
            self.connection.rollback()
            logger.error("migration %s failed: %s", migration.version, e)
            raise RuntimeError(f"Migration {migration.version} failed: {e}") from e

    def run_migrations(self, migrations: Iterable[Migration]) -> int:
        """Apply every pending migration; returns how many ran."""
        todo = self.pending(migrations)
        for migration in todo:
            self.run_migration(migration)
        return len(todo)

    def get_migration_history(self) -> list[dict]:
        rows = self.connection.execute(
            "SELECT version, description, applied_at FROM schema_version ORDER BY version"
        ).fetchall()
        return [
            {"version": version, "description": description, "applied_at": applied_at}
            for version, description, applied_at in rows
        ]


def get_current_version(connection: sqlite3.Connection) -> int:
    return MigrationRunner(connection).get_current_version()


def run_migrations(connection: sqlite3.Connection, migrations: Iterable[Migration]) -> int:
    return MigrationRunner(connection).run_migrations(migrations)
