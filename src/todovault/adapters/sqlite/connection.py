"""Store: the single connection to the local SQLite database.

One ``Store`` is created by the process root and handed to every repository.
The file is opened lazily on the first ``await store.open()``, the migrations
run once, and the same handle is returned for the rest of the process.
Concurrent first callers wait on one lock instead of opening the file twice.
"""

from __future__ import annotations

import asyncio
import atexit
import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from todovault.adapters.sqlite import schema
from todovault.adapters.sqlite.migrations import ALL_MIGRATIONS, Migration, MigrationRunner
from todovault.utils.logger import get_logger

MEMORY_PATH = ":memory:"
DEFAULT_DB_NAME = "todos.db"


def default_db_path() -> Path:
    """Location of the database when the config does not name one."""
    return Path(user_data_dir("todovault")) / DEFAULT_DB_NAME


class Store:
    """Lazily opened, process-lifetime handle on the local SQLite file.

    Provides:
    - One connection per store, opened on first access
    - Once-only, lock-guarded initialization (file creation + migrations)
    - WAL journal, dict-like rows
    - Owner-only file permissions for newly created files
    - ``None`` instead of an exception when the file cannot be opened

    Foreign key enforcement is deliberately left off: todos migrated from a
    pre-ownership file point at the bootstrap user, which may not exist yet.
    """

    def __init__(
        self,
        db_path: str | Path | None = None,
        migrations: list[Migration] | None = None,
    ):
        """Initialize the store without touching the filesystem.

        Args:
            db_path: Path to database file. If None, uses default location.
            migrations: Migration list to apply on open (default: all migrations)
        """
        if db_path is None:
            db_path = default_db_path()
        self.in_memory = str(db_path) == MEMORY_PATH
        self.db_path = Path(db_path)
        self._migrations = list(ALL_MIGRATIONS if migrations is None else migrations)
        self._connection: sqlite3.Connection | None = None
        self._lock = asyncio.Lock()
        self._cleanup_registered = False

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    async def open(self) -> sqlite3.Connection | None:
        """Get the database handle, opening and migrating the file on first use.

        Returns:
            Configured sqlite3.Connection, or None if the store is unavailable
        """
        if self._connection is not None:
            return self._connection

        async with self._lock:
            # A concurrent caller may have finished initialization while we waited
            if self._connection is None:
                self._connection = await asyncio.to_thread(self._initialize)
                if self._connection is not None and not self._cleanup_registered:
                    atexit.register(self.close)
                    self._cleanup_registered = True

        return self._connection

    def _connect(self) -> sqlite3.Connection:
        """Open the raw connection and configure it."""
        connection = sqlite3.connect(
            MEMORY_PATH if self.in_memory else str(self.db_path),
            check_same_thread=False,  # opened in a worker thread, used on the loop
            timeout=30.0,
        )
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA journal_mode = WAL")
        return connection

    def _initialize(self) -> sqlite3.Connection | None:
        """Create the file if needed and bring the schema up to date."""
        logger = get_logger("store")
        connection: sqlite3.Connection | None = None
        try:
            is_new_database = False
            if not self.in_memory:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                is_new_database = not self.db_path.exists()

            connection = self._connect()

            if is_new_database:
                os.chmod(self.db_path, 0o600)

            applied = MigrationRunner(connection).run_migrations(self._migrations)
            logger.info(
                "database ready at %s (%d migrations applied)", self.location, applied
            )
            return connection
        except Exception as e:
            logger.error("error setting up database at %s: %s", self.location, e)
            if connection is not None:
                connection.close()
            return None

    async def reset(self) -> bool:
        """Drop all tables and recreate an empty schema.

        Returns:
            True if the store is usable again afterwards
        """
        logger = get_logger("store")
        connection = await self.open()
        if connection is None:
            return False

        async with self._lock:
            try:
                for table in (
                    schema.TODOS_TABLE,
                    schema.USERS_TABLE,
                    schema.SCHEMA_VERSION_TABLE,
                ):
                    connection.execute(f"DROP TABLE IF EXISTS {table}")
                connection.commit()
            except sqlite3.Error as e:
                connection.rollback()
                logger.error("error resetting database: %s", e)
                return False

            self._connection = None
            connection.close()

        if await self.open() is None:
            return False

        logger.info("database reset at %s", self.location)
        return True

    async def schema_version(self) -> int:
        """Current schema version, or 0 when the store is unavailable."""
        connection = await self.open()
        if connection is None:
            return 0
        return MigrationRunner(connection).get_current_version()

    async def migration_history(self) -> list[dict]:
        """Applied migrations, oldest first."""
        connection = await self.open()
        if connection is None:
            return []
        return MigrationRunner(connection).get_migration_history()

    @property
    def location(self) -> str:
        """Human-readable location of the backing file."""
        if self.in_memory:
            return "in-memory database"
        return str(self.db_path.resolve())

    def close(self) -> None:
        """Close the handle. The next ``open()`` reconnects."""
        if self._connection is not None:
            try:
                self._connection.commit()
                self._connection.close()
            except sqlite3.Error:
                get_logger("store").warning("error while closing database %s", self.location)
            finally:
                self._connection = None
