"""Process exit codes for the todovault CLI.

Scripts can branch on these without parsing output. Code 4 is not used.
"""

from todovault.models.results import ErrorKind

SUCCESS = 0
ERROR_GENERAL = 1
ERROR_INVALID_ARGS = 2
ERROR_AUTH_FAILURE = 3
ERROR_NOT_FOUND = 5
ERROR_PERMISSION_DENIED = 6
ERROR_STORE_UNAVAILABLE = 7

EXIT_CODE_DESCRIPTIONS = {
    SUCCESS: "success",
    ERROR_GENERAL: "unexpected error or cancelled prompt",
    ERROR_INVALID_ARGS: "invalid arguments or input",
    ERROR_AUTH_FAILURE: "not logged in, wrong credentials or identity taken",
    ERROR_NOT_FOUND: "no todo with that id",
    ERROR_PERMISSION_DENIED: "wrong admin password",
    ERROR_STORE_UNAVAILABLE: "database file could not be opened",
}

_KIND_EXIT_CODES = {
    ErrorKind.DUPLICATE_IDENTITY: ERROR_AUTH_FAILURE,
    ErrorKind.INVALID_CREDENTIALS: ERROR_AUTH_FAILURE,
    ErrorKind.NOT_LOGGED_IN: ERROR_AUTH_FAILURE,
    ErrorKind.VALIDATION_FAILURE: ERROR_INVALID_ARGS,
    ErrorKind.STORE_UNAVAILABLE: ERROR_STORE_UNAVAILABLE,
    ErrorKind.ACCESS_DENIED: ERROR_PERMISSION_DENIED,
    ErrorKind.NOT_FOUND: ERROR_NOT_FOUND,
}


def exit_code_for(kind: ErrorKind | None) -> int:
    """Map a result's error kind to the exit code a command should return."""
    if kind is None:
        return ERROR_GENERAL
    return _KIND_EXIT_CODES.get(kind, ERROR_GENERAL)


def exit_codes_epilog() -> str:
    """Exit code table for the top-level ``--help`` text."""
    lines = [f"{code}  {text}" for code, text in sorted(EXIT_CODE_DESCRIPTIONS.items())]
    return "Exit codes:\n\n" + "\n\n".join(lines)
