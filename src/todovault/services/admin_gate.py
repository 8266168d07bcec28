"""Password gate in front of the administrative viewer.

The password is a configured constant compared by exact string match. It is
independent of user accounts and is not a security boundary.
"""

from __future__ import annotations

from todovault.models import ErrorKind, OperationResult

ACCESS_DENIED_MESSAGE = "Incorrect admin password"


class AdminGate:
    """Exact-match check against the configured admin password."""

    def __init__(self, password: str):
        self._password = password

    def check(self, attempt: str | None) -> bool:
        return attempt is not None and attempt == self._password

    def denied(self) -> OperationResult:
        return OperationResult.fail(ErrorKind.ACCESS_DENIED, ACCESS_DENIED_MESSAGE)
