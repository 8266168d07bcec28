"""Tests for the application context wiring."""

from unittest.mock import MagicMock, patch

import pytest

from todovault.models import AppConfig, SecurityConfig, StorageConfig
from todovault.services.app_context import AppContext, get_app_context
from todovault.services.password_hasher import Pbkdf2Hasher, RollingHashHasher


def test_single_store_shared(app_context):
    assert app_context.users.store is app_context.store
    assert app_context.todos.store is app_context.store
    assert app_context.diagnostics.store is app_context.store


def test_store_not_opened_on_construction(app_context):
    assert not app_context.store.is_open
    assert not app_context.store.db_path.exists()


def test_config_flows_into_services(tmp_path):
    config = AppConfig(
        storage=StorageConfig(db_path=str(tmp_path / "x.db"), strict_ownership=True),
        security=SecurityConfig(password_hasher="pbkdf2"),
    )
    ctx = AppContext.from_config(config, session_path=tmp_path / "s.json")

    assert ctx.store.db_path == tmp_path / "x.db"
    assert ctx.todo_service.strict_ownership is True
    assert isinstance(ctx.users.hasher, Pbkdf2Hasher)
    assert ctx.sessions.path == tmp_path / "s.json"
    assert ctx.diagnostics.gate.check("admin123")


def test_default_hasher_is_rolling(app_context):
    assert isinstance(app_context.users.hasher, RollingHashHasher)


@pytest.mark.asyncio
async def test_services_share_session(app_context):
    result = await app_context.auth.register("alice", "alice@example.com", "secret1")
    added = await app_context.todo_service.add_todo("first")

    assert added.success
    todos = await app_context.todo_service.get_todos()
    assert [t.user_id for t in todos] == [result.user.id]


def test_get_app_context_is_cached(app_config):
    service = MagicMock()
    service.config = app_config
    get_app_context.cache_clear()
    try:
        with patch(
            "todovault.services.app_context.get_config_service", return_value=service
        ):
            ctx = get_app_context()
            assert get_app_context() is ctx
        ctx.store.close()
    finally:
        get_app_context.cache_clear()
