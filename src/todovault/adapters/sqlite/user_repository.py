"""SQLite implementation of UserRepository."""

from __future__ import annotations

import sqlite3
from datetime import UTC, datetime

from pydantic import ValidationError

from todovault.adapters.sqlite.connection import Store
from todovault.adapters.sqlite.utils import (
    row_to_dict,
    rows_to_models,
    utc_days_ago,
    utc_today,
)
from todovault.models import (
    AuthResult,
    ErrorKind,
    RecentUser,
    User,
    UserStats,
    UserWithTodoCounts,
)
from todovault.repositories import UserRepository
from todovault.services.password_hasher import PasswordHasher, RollingHashHasher
from todovault.utils.logger import get_logger

DUPLICATE_IDENTITY_MESSAGE = "Username or email already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"


class SqliteUserRepository(UserRepository):
    """SQLite implementation of the identity repository."""

    def __init__(self, store: Store, hasher: PasswordHasher | None = None):
        """Initialize SQLite user repository.

        Args:
            store: Shared store owning the database handle
            hasher: Password digest strategy (default: legacy rolling hash)
        """
        self.store = store
        self.hasher = hasher or RollingHashHasher()

    async def register(self, username: str, email: str, password: str) -> AuthResult:
        connection = await self.store.open()
        if connection is None:
            return AuthResult.unavailable()

        try:
            existing = connection.execute(
                "SELECT id FROM users WHERE username = ? OR email = ?",
                (username, email),
            ).fetchone()
            if existing:
                return AuthResult.fail(
                    ErrorKind.DUPLICATE_IDENTITY, DUPLICATE_IDENTITY_MESSAGE
                )

            cursor = connection.execute(
                "INSERT INTO users (username, email, password) VALUES (?, ?, ?)",
                (username, email, self.hasher.hash(password)),
            )
            connection.commit()

            row = connection.execute(
                "SELECT id, username, email, createdAt FROM users WHERE id = ?",
                (cursor.lastrowid,),
            ).fetchone()
        except sqlite3.IntegrityError:
            # Lost a race against another registration for the same identity
            connection.rollback()
            return AuthResult.fail(ErrorKind.DUPLICATE_IDENTITY, DUPLICATE_IDENTITY_MESSAGE)
        except sqlite3.Error as e:
            connection.rollback()
            get_logger("users").error("registration error: %s", e)
            return AuthResult.fail(ErrorKind.STORAGE_FAILURE, "Registration failed")

        get_logger("users").info("registered user id=%s", cursor.lastrowid)
        return AuthResult(success=True, user=User.model_validate(row_to_dict(row)))

    async def login(self, username: str, password: str) -> AuthResult:
        connection = await self.store.open()
        if connection is None:
            return AuthResult.unavailable()

        try:
            row = connection.execute(
                "SELECT id, username, email, password, createdAt FROM users WHERE username = ?",
                (username,),
            ).fetchone()
        except sqlite3.Error as e:
            get_logger("users").error("login error: %s", e)
            return AuthResult.fail(ErrorKind.STORAGE_FAILURE, "Login failed")

        if row is None or not self.hasher.verify(password, row["password"]):
            return AuthResult.fail(
                ErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE
            )

        data = row_to_dict(row)
        data.pop("password")
        try:
            user = User.model_validate(data)
        except ValidationError as e:
            get_logger("users").error("unreadable user row id=%s: %s", data.get("id"), e)
            return AuthResult.fail(ErrorKind.STORAGE_FAILURE, "Login failed")
        return AuthResult(success=True, user=user)

    async def get_user_count(self) -> int:
        connection = await self.store.open()
        if connection is None:
            return 0
        try:
            return connection.execute("SELECT COUNT(*) AS count FROM users").fetchone()[
                "count"
            ]
        except sqlite3.Error as e:
            get_logger("users").error("error getting user count: %s", e)
            return 0

    async def list_users(self) -> list[User]:
        connection = await self.store.open()
        if connection is None:
            return []
        try:
            rows = connection.execute(
                "SELECT id, username, email, createdAt FROM users "
                "ORDER BY createdAt DESC, id DESC"
            ).fetchall()
        except sqlite3.Error as e:
            get_logger("users").error("error getting users: %s", e)
            return []
        return rows_to_models(User, rows, "users")

    async def get_user_stats(self) -> UserStats:
        now = datetime.now(UTC)
        connection = await self.store.open()
        if connection is None:
            return UserStats(last_updated=now)

        try:
            total = connection.execute("SELECT COUNT(*) FROM users").fetchone()[0]
            today = connection.execute(
                "SELECT COUNT(*) FROM users WHERE DATE(createdAt) = ?",
                (utc_today(),),
            ).fetchone()[0]
            week = connection.execute(
                "SELECT COUNT(*) FROM users WHERE createdAt >= ?",
                (utc_days_ago(7),),
            ).fetchone()[0]
            recent = connection.execute(
                "SELECT username, createdAt FROM users "
                "ORDER BY createdAt DESC, id DESC LIMIT 1"
            ).fetchone()
        except sqlite3.Error as e:
            get_logger("users").error("error getting user stats: %s", e)
            return UserStats(last_updated=now)

        recent_users = rows_to_models(RecentUser, [recent] if recent else [], "users")
        return UserStats(
            total_users=total,
            today_users=today,
            week_users=week,
            recent_user=recent_users[0] if recent_users else None,
            last_updated=now,
        )

    async def list_users_with_todo_counts(self) -> list[UserWithTodoCounts]:
        connection = await self.store.open()
        if connection is None:
            return []
        try:
            rows = connection.execute("""
                SELECT
                    u.id,
                    u.username,
                    u.email,
                    u.createdAt,
                    COUNT(t.id) AS todoCount,
                    COUNT(CASE WHEN t.completed = 1 THEN 1 END) AS completedTodos,
                    COUNT(CASE WHEN t.completed = 0 THEN 1 END) AS pendingTodos
                FROM users u
                LEFT JOIN todos t ON u.id = t.userId
                GROUP BY u.id, u.username, u.email, u.createdAt
                ORDER BY u.createdAt DESC, u.id DESC
                """).fetchall()
        except sqlite3.Error as e:
            get_logger("users").error("error getting users with todo counts: %s", e)
            return []
        return rows_to_models(UserWithTodoCounts, rows, "users")
