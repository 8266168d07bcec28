"""Todo service - session-scoped todo operations.

Every call resolves the current user from the session store; todos are always
created for, and listed from, that user.
"""

from __future__ import annotations

from todovault.models import ErrorKind, OperationResult, Todo, TodoResult
from todovault.repositories import TodoRepository
from todovault.services.session_store import SessionStore

NOT_LOGGED_IN_MESSAGE = "User not logged in"


class TodoService:
    """Service for todo business logic."""

    def __init__(
        self,
        todo_repository: TodoRepository,
        session_store: SessionStore,
        strict_ownership: bool = False,
    ):
        """Initialize the todo service.

        Args:
            todo_repository: TodoRepository implementation for data access
            session_store: Source of the current user
            strict_ownership: When True, toggle/delete only match todos owned
                by the current user. When False they match on id alone.
        """
        self.repository = todo_repository
        self.sessions = session_store
        self.strict_ownership = strict_ownership

    async def add_todo(self, title: str) -> TodoResult:
        """Create a todo for the current user; the title is stored trimmed."""
        title = title.strip()
        if not title:
            return TodoResult.fail(
                ErrorKind.VALIDATION_FAILURE, "Please enter a todo title"
            )

        user = self.sessions.get_current_user()
        if user is None:
            return TodoResult.fail(ErrorKind.NOT_LOGGED_IN, NOT_LOGGED_IN_MESSAGE)

        return await self.repository.add_todo(user.id, title)

    async def get_todos(self) -> list[Todo]:
        """Todos of the current user, newest first; [] when nobody is logged in."""
        user = self.sessions.get_current_user()
        if user is None:
            return []
        return await self.repository.list_todos(user.id)

    def _owner_scope(self) -> tuple[int | None, OperationResult | None]:
        if not self.strict_ownership:
            return None, None
        user = self.sessions.get_current_user()
        if user is None:
            return None, OperationResult.fail(
                ErrorKind.NOT_LOGGED_IN, NOT_LOGGED_IN_MESSAGE
            )
        return user.id, None

    async def update_todo_status(self, todo_id: int, completed: bool) -> OperationResult:
        """Mark a todo completed or not completed."""
        owner, failure = self._owner_scope()
        if failure is not None:
            return failure
        return await self.repository.set_completed(todo_id, completed, user_id=owner)

    async def delete_todo(self, todo_id: int) -> OperationResult:
        """Delete a todo."""
        owner, failure = self._owner_scope()
        if failure is not None:
            return failure
        return await self.repository.delete_todo(todo_id, user_id=owner)
