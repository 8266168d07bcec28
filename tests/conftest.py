"""Shared test fixtures and configuration.

Every test gets a private log directory and, where requested, a store backed
by a file under *tmp_path*, so nothing touches the real user directories.
"""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from todovault.adapters.sqlite import SqliteTodoRepository, SqliteUserRepository, Store
from todovault.models import AppConfig, StorageConfig
from todovault.services.app_context import AppContext
from todovault.services.session_store import SessionStore


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_log_dir(tmp_path):
    """Send the application log to tmp_path and reset the logger singleton."""
    import todovault.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("todovault").handlers.clear()
    log_dir = tmp_path / "logs"
    with patch("todovault.utils.logger.user_log_dir", return_value=str(log_dir)):
        yield log_dir
    for handler in logging.getLogger("todovault").handlers:
        handler.close()
    logging.getLogger("todovault").handlers.clear()
    logger_mod._logger = None


# ---------------------------------------------------------------------------
# Store and repositories
# ---------------------------------------------------------------------------


@pytest.fixture()
def db_path(tmp_path):
    return tmp_path / "data" / "todos.db"


@pytest.fixture()
def store(db_path):
    """A Store on a fresh file; closed after the test."""
    s = Store(db_path)
    yield s
    s.close()


@pytest.fixture()
def unavailable_store():
    """Stand-in for a store whose file could not be opened."""
    s = MagicMock(spec=Store)
    s.open = AsyncMock(return_value=None)
    s.location = "<nowhere>"
    return s


@pytest.fixture()
def user_repo(store):
    return SqliteUserRepository(store)


@pytest.fixture()
def todo_repo(store):
    return SqliteTodoRepository(store)


@pytest.fixture()
def session_store(tmp_path):
    return SessionStore(tmp_path / "config" / "session.json")


# ---------------------------------------------------------------------------
# Application context (CLI tests)
# ---------------------------------------------------------------------------


@pytest.fixture()
def app_config(tmp_path):
    return AppConfig(storage=StorageConfig(db_path=str(tmp_path / "cli" / "todos.db")))


@pytest.fixture()
def app_context(app_config, tmp_path):
    ctx = AppContext.from_config(app_config, session_path=tmp_path / "cli" / "session.json")
    yield ctx
    ctx.store.close()


@pytest.fixture()
def patch_app_context(app_context):
    """Make every command module resolve *app_context*."""
    targets = [
        "todovault.commands.decorators.get_app_context",
        "todovault.commands.auth.get_app_context",
        "todovault.commands.todos.get_app_context",
        "todovault.commands.admin.get_app_context",
    ]
    patchers = [patch(t, return_value=app_context) for t in targets]
    for p in patchers:
        p.start()
    yield app_context
    for p in patchers:
        p.stop()
