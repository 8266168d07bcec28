"""Unit tests for todovault.utils.exit_codes."""

from __future__ import annotations

import pytest

from todovault.models import ErrorKind
from todovault.utils.exit_codes import (
    ERROR_AUTH_FAILURE,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_PERMISSION_DENIED,
    ERROR_STORE_UNAVAILABLE,
    SUCCESS,
    EXIT_CODE_DESCRIPTIONS,
    exit_code_for,
    exit_codes_epilog,
)


class TestExitCodeConstants:
    def test_values(self):
        assert SUCCESS == 0
        assert ERROR_GENERAL == 1
        assert ERROR_INVALID_ARGS == 2
        assert ERROR_AUTH_FAILURE == 3
        assert ERROR_NOT_FOUND == 5
        assert ERROR_PERMISSION_DENIED == 6
        assert ERROR_STORE_UNAVAILABLE == 7


class TestDescriptions:
    def test_every_code_described(self):
        assert set(EXIT_CODE_DESCRIPTIONS) == {
            SUCCESS,
            ERROR_GENERAL,
            ERROR_INVALID_ARGS,
            ERROR_AUTH_FAILURE,
            ERROR_NOT_FOUND,
            ERROR_PERMISSION_DENIED,
            ERROR_STORE_UNAVAILABLE,
        }

    def test_epilog_lists_codes_in_order(self):
        text = exit_codes_epilog()
        assert text.startswith("Exit codes:")
        assert text.index("0  success") < text.index("7  database file")


class TestExitCodeFor:
    @pytest.mark.parametrize(
        "kind,code",
        [
            (ErrorKind.DUPLICATE_IDENTITY, ERROR_AUTH_FAILURE),
            (ErrorKind.INVALID_CREDENTIALS, ERROR_AUTH_FAILURE),
            (ErrorKind.NOT_LOGGED_IN, ERROR_AUTH_FAILURE),
            (ErrorKind.VALIDATION_FAILURE, ERROR_INVALID_ARGS),
            (ErrorKind.STORE_UNAVAILABLE, ERROR_STORE_UNAVAILABLE),
            (ErrorKind.ACCESS_DENIED, ERROR_PERMISSION_DENIED),
            (ErrorKind.NOT_FOUND, ERROR_NOT_FOUND),
            (ErrorKind.STORAGE_FAILURE, ERROR_GENERAL),
            (None, ERROR_GENERAL),
        ],
    )
    def test_mapping(self, kind, code):
        assert exit_code_for(kind) == code

    def test_every_kind_is_mapped(self):
        for kind in ErrorKind:
            assert exit_code_for(kind) in {
                ERROR_GENERAL,
                ERROR_INVALID_ARGS,
                ERROR_AUTH_FAILURE,
                ERROR_NOT_FOUND,
                ERROR_PERMISSION_DENIED,
                ERROR_STORE_UNAVAILABLE,
            }
