"""Configuration models for todovault.

The configuration is a single JSON document validated by these models.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class StorageConfig(BaseModel):
    """Local database settings."""

    db_path: str | None = Field(
        default=None, description="SQLite file path (default: user data dir)"
    )
    strict_ownership: bool = Field(
        default=False,
        description="Scope todo toggle/delete by the logged-in user",
    )

    @field_validator("db_path")
    @classmethod
    def validate_db_path(cls, v: str | None) -> str | None:
        """Treat blank paths as unset."""
        if v is None or not v.strip():
            return None
        return v.strip()


class AdminConfig(BaseModel):
    """Administrative viewer settings."""

    password: str = Field(default="admin123", description="Viewer gate password")


class SecurityConfig(BaseModel):
    """Password storage settings."""

    password_hasher: Literal["rolling", "pbkdf2"] = Field(
        default="rolling", description="Digest used for new and checked passwords"
    )


class OutputConfig(BaseModel):
    """Output configuration."""

    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main todovault configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    admin: AdminConfig = Field(default_factory=AdminConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
