"""Models backing the administrative database viewer."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ColumnInfo(BaseModel):
    """One row of ``PRAGMA table_info``."""

    name: str
    type: str = ""
    not_null: bool = False
    default: str | None = None
    pk: bool = False


class StoreInfo(BaseModel):
    """Location, tables and record counts of the local database."""

    path: str
    platform_hint: str
    tables: list[str] = Field(default_factory=list)
    user_count: int = 0
    todo_count: int = 0
    total_records: int = 0
    estimated_size_kb: int = 1
