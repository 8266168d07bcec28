"""SQLite implementation of TodoRepository."""

from __future__ import annotations

import sqlite3
from typing import Any

from todovault.adapters.sqlite.connection import Store
from todovault.adapters.sqlite.utils import rows_to_models
from todovault.models import ErrorKind, OperationResult, Todo, TodoResult
from todovault.repositories import TodoRepository
from todovault.utils.logger import get_logger


class SqliteTodoRepository(TodoRepository):
    """SQLite implementation of the task repository."""

    def __init__(self, store: Store):
        """Initialize SQLite todo repository.

        Args:
            store: Shared store owning the database handle
        """
        self.store = store

    async def add_todo(self, user_id: int, title: str) -> TodoResult:
        connection = await self.store.open()
        if connection is None:
            return TodoResult.unavailable()

        try:
            cursor = connection.execute(
                "INSERT INTO todos (userId, title, completed) VALUES (?, ?, 0)",
                (user_id, title),
            )
            connection.commit()
        except sqlite3.Error as e:
            connection.rollback()
            get_logger("todos").error("error adding todo: %s", e)
            return TodoResult.fail(ErrorKind.STORAGE_FAILURE, "Failed to save todo")

        return TodoResult(success=True, inserted_id=cursor.lastrowid)

    async def list_todos(self, user_id: int) -> list[Todo]:
        connection = await self.store.open()
        if connection is None:
            return []
        try:
            rows = connection.execute(
                "SELECT * FROM todos WHERE userId = ? ORDER BY createdAt DESC, id DESC",
                (user_id,),
            ).fetchall()
        except sqlite3.Error as e:
            get_logger("todos").error("error getting todos: %s", e)
            return []
        return rows_to_models(Todo, rows, "todos")

    async def _write(
        self, sql: str, params: list[Any], user_id: int | None, action: str
    ) -> OperationResult:
        connection = await self.store.open()
        if connection is None:
            return OperationResult.unavailable()

        if user_id is not None:
            sql += " AND userId = ?"
            params.append(user_id)

        try:
            cursor = connection.execute(sql, params)
            connection.commit()
        except sqlite3.Error as e:
            connection.rollback()
            get_logger("todos").error("error %s todo: %s", action, e)
            return OperationResult.fail(
                ErrorKind.STORAGE_FAILURE, f"Failed to {action} todo"
            )

        return OperationResult(success=True, affected=cursor.rowcount)

    async def set_completed(
        self, todo_id: int, completed: bool, *, user_id: int | None = None
    ) -> OperationResult:
        return await self._write(
            "UPDATE todos SET completed = ? WHERE id = ?",
            [1 if completed else 0, todo_id],
            user_id,
            "update",
        )

    async def delete_todo(
        self, todo_id: int, *, user_id: int | None = None
    ) -> OperationResult:
        return await self._write(
            "DELETE FROM todos WHERE id = ?", [todo_id], user_id, "delete"
        )

    async def list_all_todos(self) -> list[Todo]:
        connection = await self.store.open()
        if connection is None:
            return []
        try:
            rows = connection.execute("SELECT * FROM todos ORDER BY id DESC").fetchall()
        except sqlite3.Error as e:
            get_logger("todos").error("error loading all todos: %s", e)
            return []
        return rows_to_models(Todo, rows, "todos")

    async def count_todos(self) -> int:
        connection = await self.store.open()
        if connection is None:
            return 0
        try:
            return connection.execute("SELECT COUNT(*) FROM todos").fetchone()[0]
        except sqlite3.Error as e:
            get_logger("todos").error("error counting todos: %s", e)
            return 0

    async def clear_all(self, include_users: bool = False) -> OperationResult:
        connection = await self.store.open()
        if connection is None:
            return OperationResult.unavailable()

        try:
            affected = connection.execute("DELETE FROM todos").rowcount
            if include_users:
                affected += connection.execute("DELETE FROM users").rowcount
            connection.commit()
        except sqlite3.Error as e:
            connection.rollback()
            get_logger("todos").error("error clearing data: %s", e)
            return OperationResult.fail(ErrorKind.STORAGE_FAILURE, "Failed to clear data")

        get_logger("todos").warning(
            "cleared %d rows (include_users=%s)", affected, include_users
        )
        return OperationResult(success=True, affected=affected)
