"""Repository abstraction layer for todovault.

These abstract base classes are the ports the services depend on. The SQLite
adapters in ``todovault.adapters.sqlite`` implement them. Every method returns
a result model or a best-effort empty value; none raises storage errors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from todovault.models import (
    AuthResult,
    OperationResult,
    Todo,
    TodoResult,
    User,
    UserStats,
    UserWithTodoCounts,
)


class UserRepository(ABC):
    """Identity persistence: registration, credential lookup and user stats."""

    @abstractmethod
    async def register(self, username: str, email: str, password: str) -> AuthResult:
        """Create a user unless the username or email is already taken.

        Args:
            username: Unique login name (case-sensitive)
            email: Unique email address
            password: Plaintext password, digested before storage

        Returns:
            AuthResult with the new public user, or a DUPLICATE_IDENTITY failure
        """
        raise NotImplementedError(
            "UserRepository.register() must be implemented by adapter"
        )

    @abstractmethod
    async def login(self, username: str, password: str) -> AuthResult:
        """Look up a user by username and password.

        Wrong username and wrong password produce the same INVALID_CREDENTIALS
        failure.
        """
        raise NotImplementedError("UserRepository.login() must be implemented by adapter")

    @abstractmethod
    async def get_user_count(self) -> int:
        """Number of registered users (0 on failure)."""
        raise NotImplementedError(
            "UserRepository.get_user_count() must be implemented by adapter"
        )

    @abstractmethod
    async def list_users(self) -> list[User]:
        """All users, newest first, without password digests."""
        raise NotImplementedError(
            "UserRepository.list_users() must be implemented by adapter"
        )

    @abstractmethod
    async def get_user_stats(self) -> UserStats:
        """Registration counts (all time, today, last 7 days) and latest user."""
        raise NotImplementedError(
            "UserRepository.get_user_stats() must be implemented by adapter"
        )

    @abstractmethod
    async def list_users_with_todo_counts(self) -> list[UserWithTodoCounts]:
        """All users with their total, completed and pending todo counts."""
        raise NotImplementedError(
            "UserRepository.list_users_with_todo_counts() must be implemented by adapter"
        )


class TodoRepository(ABC):
    """Todo persistence, scoped by owning user."""

    @abstractmethod
    async def add_todo(self, user_id: int, title: str) -> TodoResult:
        """Insert a new, not completed todo for *user_id*."""
        raise NotImplementedError(
            "TodoRepository.add_todo() must be implemented by adapter"
        )

    @abstractmethod
    async def list_todos(self, user_id: int) -> list[Todo]:
        """Todos owned by *user_id*, most recent first ([] on failure)."""
        raise NotImplementedError(
            "TodoRepository.list_todos() must be implemented by adapter"
        )

    @abstractmethod
    async def set_completed(
        self, todo_id: int, completed: bool, *, user_id: int | None = None
    ) -> OperationResult:
        """Set the completion flag.

        Without *user_id* the update matches on id alone; with it, only a todo
        owned by that user is touched.
        """
        raise NotImplementedError(
            "TodoRepository.set_completed() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_todo(
        self, todo_id: int, *, user_id: int | None = None
    ) -> OperationResult:
        """Delete a todo, with the same scoping rule as ``set_completed``."""
        raise NotImplementedError(
            "TodoRepository.delete_todo() must be implemented by adapter"
        )

    @abstractmethod
    async def list_all_todos(self) -> list[Todo]:
        """Every todo of every user (administrative view)."""
        raise NotImplementedError(
            "TodoRepository.list_all_todos() must be implemented by adapter"
        )

    @abstractmethod
    async def count_todos(self) -> int:
        """Number of todos across all users (0 on failure)."""
        raise NotImplementedError(
            "TodoRepository.count_todos() must be implemented by adapter"
        )

    @abstractmethod
    async def clear_all(self, include_users: bool = False) -> OperationResult:
        """Delete every todo, and every user too when *include_users* is set."""
        raise NotImplementedError(
            "TodoRepository.clear_all() must be implemented by adapter"
        )
