"""Tests for the shared Rich consoles."""

import pytest

from todovault.utils.ui import console as console_mod
from todovault.utils.ui.console import get_console, set_color_enabled


@pytest.fixture(autouse=True)
def restore_color(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    yield
    monkeypatch.delenv("NO_COLOR", raising=False)
    set_color_enabled(True)


def test_console_shared_per_highlight_mode():
    assert get_console() is get_console()
    assert get_console(highlight=False) is not get_console()


def test_disable_color_updates_existing_consoles():
    console = get_console()
    set_color_enabled(False)
    assert console.no_color is True

    set_color_enabled(True)
    assert console.no_color is False


def test_new_console_inherits_disabled_color(monkeypatch):
    monkeypatch.setattr(console_mod, "_consoles", {})
    set_color_enabled(False)
    assert get_console(highlight=False).no_color is True


def test_no_color_env_wins(monkeypatch):
    console = get_console()
    monkeypatch.setenv("NO_COLOR", "1")
    set_color_enabled(True)
    assert console.no_color is True
