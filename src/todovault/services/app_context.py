"""Process root: builds the store once and injects it everywhere.

Commands never construct repositories themselves; they ask for the cached
``AppContext``, which owns the single ``Store`` and the services built on it.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from todovault.adapters.sqlite import SqliteTodoRepository, SqliteUserRepository, Store
from todovault.models import AppConfig
from todovault.services.admin_gate import AdminGate
from todovault.services.auth_service import AuthService
from todovault.services.config_service import get_config_service
from todovault.services.diagnostics_service import DiagnosticsService
from todovault.services.password_hasher import get_password_hasher
from todovault.services.session_store import SessionStore
from todovault.services.todo_service import TodoService
from todovault.utils.ui.console import set_color_enabled


@dataclass
class AppContext:
    """Everything a command needs, wired around one store."""

    config: AppConfig
    store: Store
    sessions: SessionStore
    users: SqliteUserRepository
    todos: SqliteTodoRepository
    auth: AuthService
    todo_service: TodoService
    diagnostics: DiagnosticsService

    @classmethod
    def from_config(
        cls, config: AppConfig, session_path: str | Path | None = None
    ) -> AppContext:
        """Build the object graph described by *config*.

        Nothing touches the database here; the store opens on first use.
        """
        set_color_enabled(config.output.color)
        store = Store(config.storage.db_path)
        sessions = SessionStore(session_path)
        users = SqliteUserRepository(
            store, get_password_hasher(config.security.password_hasher)
        )
        todos = SqliteTodoRepository(store)
        return cls(
            config=config,
            store=store,
            sessions=sessions,
            users=users,
            todos=todos,
            auth=AuthService(users, sessions),
            todo_service=TodoService(
                todos, sessions, strict_ownership=config.storage.strict_ownership
            ),
            diagnostics=DiagnosticsService(
                store, users, todos, AdminGate(config.admin.password)
            ),
        )


@lru_cache(maxsize=1)
def get_app_context() -> AppContext:
    """Get the cached AppContext for the active configuration."""
    return AppContext.from_config(get_config_service().config)
