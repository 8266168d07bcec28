"""User data models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """Public view of a registered user (no password digest)."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    username: str
    email: str
    created_at: datetime | None = Field(default=None, alias="createdAt")


class UserWithTodoCounts(User):
    """User row joined with aggregate todo counts."""

    todo_count: int = Field(default=0, alias="todoCount")
    completed_todos: int = Field(default=0, alias="completedTodos")
    pending_todos: int = Field(default=0, alias="pendingTodos")


class RecentUser(BaseModel):
    """Most recently registered user, as shown in registration stats."""

    model_config = ConfigDict(populate_by_name=True)

    username: str
    created_at: datetime | None = Field(default=None, alias="createdAt")


class UserStats(BaseModel):
    """Registration statistics over the users table."""

    total_users: int = 0
    today_users: int = 0
    week_users: int = 0
    recent_user: RecentUser | None = None
    last_updated: datetime
