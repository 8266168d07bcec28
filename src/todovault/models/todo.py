"""Todo data models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Todo(BaseModel):
    """A single to-do item owned by one user."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    user_id: int = Field(alias="userId")
    title: str
    completed: bool = False
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @field_validator("completed", mode="before")
    @classmethod
    def null_is_open(cls, v):
        """Files written before the column had a default may hold NULL."""
        return False if v is None else v
