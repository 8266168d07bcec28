"""todovault domain models.

Pydantic models for users, todos, operation results and diagnostics. Column
names stay camelCase in the database; the models expose snake_case attributes
and accept the camelCase keys through field aliases.
"""

from .config_models import (
    AdminConfig,
    AppConfig,
    OutputConfig,
    SecurityConfig,
    StorageConfig,
)
from .diagnostics import ColumnInfo, StoreInfo
from .results import (
    AuthResult,
    ErrorKind,
    OperationResult,
    Result,
    TodoResult,
)
from .todo import Todo
from .user import RecentUser, User, UserStats, UserWithTodoCounts

__all__ = [
    # Entities
    "User",
    "UserWithTodoCounts",
    "RecentUser",
    "UserStats",
    "Todo",
    # Results
    "Result",
    "AuthResult",
    "TodoResult",
    "OperationResult",
    "ErrorKind",
    # Diagnostics
    "ColumnInfo",
    "StoreInfo",
    # Config
    "AppConfig",
    "StorageConfig",
    "AdminConfig",
    "OutputConfig",
    "SecurityConfig",
]
