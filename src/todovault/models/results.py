"""Discriminated result models returned by repositories and services.

Storage faults never escape the repository boundary as exceptions. Instead every
operation returns one of these results: ``success=True`` with its payload, or
``success=False`` with a short human-readable ``error`` and a machine-readable
``kind``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from todovault.models.user import User


class ErrorKind(str, Enum):
    """Failure taxonomy shared by every caller-facing operation."""

    DUPLICATE_IDENTITY = "duplicate_identity"
    INVALID_CREDENTIALS = "invalid_credentials"
    STORE_UNAVAILABLE = "store_unavailable"
    VALIDATION_FAILURE = "validation_failure"
    NOT_LOGGED_IN = "not_logged_in"
    STORAGE_FAILURE = "storage_failure"
    ACCESS_DENIED = "access_denied"
    NOT_FOUND = "not_found"


STORE_UNAVAILABLE_MESSAGE = "Database unavailable"


class Result(BaseModel):
    """Base result shape."""

    success: bool
    error: str | None = None
    kind: ErrorKind | None = None

    @classmethod
    def fail(cls, kind: ErrorKind, error: str):
        return cls(success=False, kind=kind, error=error)

    @classmethod
    def unavailable(cls):
        return cls.fail(ErrorKind.STORE_UNAVAILABLE, STORE_UNAVAILABLE_MESSAGE)


class AuthResult(Result):
    """Outcome of register/login. ``user`` never carries the password digest."""

    user: User | None = None


class TodoResult(Result):
    """Outcome of adding a todo."""

    inserted_id: int | None = None


class OperationResult(Result):
    """Outcome of an update/delete/clear; ``affected`` is the row count."""

    affected: int = 0
