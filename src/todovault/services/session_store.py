"""Persistence of the logged-in user between CLI invocations.

The session is the public user record (id, username, email) serialized to a
JSON file readable only by its owner. The store trusts whatever it reads back;
a missing or unreadable file simply means nobody is logged in.
"""

from __future__ import annotations

import json
from json import JSONDecodeError
from pathlib import Path

from platformdirs import user_config_dir
from pydantic import ValidationError

from todovault.models import User
from todovault.utils.logger import get_logger

SESSION_FILE = "session.json"


class SessionStore:
    """File-backed store for the current user."""

    def __init__(self, path: str | Path | None = None):
        """Initialize the session store.

        Args:
            path: Session file path. If None, uses the user config directory.
        """
        if path is None:
            path = Path(user_config_dir("todovault")) / SESSION_FILE
        self.path = Path(path)

    def get_current_user(self) -> User | None:
        """Return the stored user, or None when no valid session exists."""
        if not self.path.exists():
            return None
        try:
            with open(self.path, encoding="utf-8") as f:
                return User.model_validate(json.load(f))
        except (OSError, JSONDecodeError, ValidationError) as e:
            get_logger("session").warning("ignoring unreadable session file %s: %s", self.path, e)
            return None

    def set_session(self, user: User) -> None:
        """Persist *user* as the current session."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(user.model_dump(mode="json"), f, indent=2)

        # Set secure file permissions
        self.path.chmod(0o600)

    def clear_session(self) -> None:
        """Forget the current user. Safe to call when nobody is logged in."""
        self.path.unlink(missing_ok=True)
