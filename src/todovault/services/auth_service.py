"""Service for registration, login and the active session."""

from __future__ import annotations

import re

from todovault.models import AuthResult, ErrorKind, OperationResult, User
from todovault.repositories import UserRepository
from todovault.services.session_store import SessionStore
from todovault.utils.logger import get_logger

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


def _invalid(message: str) -> AuthResult:
    return AuthResult.fail(ErrorKind.VALIDATION_FAILURE, message)


class AuthService:
    """Validates credentials input, talks to the user repository and keeps the
    session in sync with the outcome."""

    def __init__(self, user_repository: UserRepository, session_store: SessionStore):
        self.repository = user_repository
        self.sessions = session_store

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        confirm_password: str | None = None,
    ) -> AuthResult:
        """Register a new account and log it in.

        Username and email are trimmed before storage; the password is used
        exactly as typed.

        Args:
            username: Desired username (at least 3 characters)
            email: Email address
            password: Password (at least 6 characters)
            confirm_password: Optional repeat of the password that must match

        Returns:
            AuthResult with the new user, or a validation/duplicate failure
        """
        username = username.strip()
        email = email.strip()

        fields = [username, email, password.strip()]
        if confirm_password is not None:
            fields.append(confirm_password.strip())
        if not all(fields):
            return _invalid("Please fill in all fields")

        if len(username) < MIN_USERNAME_LENGTH:
            return _invalid(
                f"Username must be at least {MIN_USERNAME_LENGTH} characters long"
            )

        if not EMAIL_PATTERN.match(email):
            return _invalid("Please enter a valid email address")

        if len(password) < MIN_PASSWORD_LENGTH:
            return _invalid(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        if confirm_password is not None and password != confirm_password:
            return _invalid("Passwords do not match")

        result = await self.repository.register(username, email, password)
        if result.success and result.user is not None:
            self.sessions.set_session(result.user)
        return result

    async def login(self, username: str, password: str) -> AuthResult:
        """Log in and store the session on success."""
        username = username.strip()
        if not username or not password.strip():
            return _invalid("Please fill in all fields")

        result = await self.repository.login(username, password)
        if result.success and result.user is not None:
            self.sessions.set_session(result.user)
            get_logger("auth").info("user id=%s logged in", result.user.id)
        return result

    def logout(self) -> OperationResult:
        """Clear the session."""
        try:
            self.sessions.clear_session()
        except OSError as e:
            get_logger("auth").error("logout error: %s", e)
            return OperationResult.fail(ErrorKind.STORAGE_FAILURE, "Logout failed")
        return OperationResult(success=True)

    def get_current_user(self) -> User | None:
        return self.sessions.get_current_user()

    def is_logged_in(self) -> bool:
        return self.get_current_user() is not None
