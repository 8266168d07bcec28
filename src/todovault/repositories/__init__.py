"""Repository interfaces for todovault.

Abstract base classes defining the persistence contracts. The implementations
live in ``todovault.adapters.sqlite``.
"""

from .repository import TodoRepository, UserRepository

__all__ = [
    "UserRepository",
    "TodoRepository",
]
