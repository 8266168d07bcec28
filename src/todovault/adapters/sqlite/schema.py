"""Table definitions for the local todovault database.

Column names are camelCase so that files created by earlier releases of the
app open unchanged.
"""

from __future__ import annotations

USERS_TABLE = "users"
TODOS_TABLE = "todos"
LEGACY_TODOS_TABLE = "todos_old"
SCHEMA_VERSION_TABLE = "schema_version"

# Owner assigned to todos that predate per-user ownership
BOOTSTRAP_USER_ID = 1

# Users table
CREATE_USERS_TABLE = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT UNIQUE NOT NULL,
    email TEXT UNIQUE NOT NULL,
    password TEXT NOT NULL,
    createdAt DATETIME DEFAULT CURRENT_TIMESTAMP
)
"""

# Todos table for fresh installs - owner is mandatory, no default
CREATE_TODOS_TABLE = """
CREATE TABLE todos (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    userId INTEGER NOT NULL,
    title TEXT NOT NULL,
    completed INTEGER DEFAULT 0,
    createdAt DATETIME DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (userId) REFERENCES users (id)
)
"""

# Todos table rebuilt from a pre-ownership file - rows default to the bootstrap user
CREATE_MIGRATED_TODOS_TABLE = f"""
CREATE TABLE todos (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    userId INTEGER NOT NULL DEFAULT {BOOTSTRAP_USER_ID},
    title TEXT NOT NULL,
    completed INTEGER DEFAULT 0,
    createdAt DATETIME DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (userId) REFERENCES users (id)
)
"""

# Schema version tracking
CREATE_SCHEMA_VERSION_TABLE = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    description TEXT NOT NULL,
    applied_at DATETIME NOT NULL
)
"""

# Tables holding application data, in dependency order
DATA_TABLES = [USERS_TABLE, TODOS_TABLE]

# Columns a legacy todos table may carry over into the migrated table
LEGACY_TODO_COLUMNS = ["id", "title", "completed", "createdAt"]


def table_columns(connection, table: str) -> list[str]:
    """Return the column names of *table*, or an empty list if it does not exist.

    Args:
        connection: sqlite3.Connection object
        table: Table name (trusted, not user input)
    """
    rows = connection.execute(f"PRAGMA table_info({table})").fetchall()
    return [row[1] for row in rows]


def table_exists(connection, table: str) -> bool:
    """Check whether *table* exists in the database."""
    row = connection.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
        (table,),
    ).fetchone()
    return row is not None
