"""Shared Rich consoles.

One console per highlight mode is shared by every command module so that the
``output.color`` setting can be applied in a single place.
"""

import os

from rich.console import Console

_consoles: dict[bool, Console] = {}
_color_enabled = True


def get_console(highlight: bool = True) -> Console:
    """Get the shared console for *highlight* mode."""
    console = _consoles.get(highlight)
    if console is None:
        console = Console(highlight=highlight)
        if not _color_enabled:
            console.no_color = True
        _consoles[highlight] = console
    return console


def set_color_enabled(enabled: bool) -> None:
    """Turn colored output on or off for every shared console.

    ``NO_COLOR`` in the environment still wins when color is enabled here.
    """
    global _color_enabled
    _color_enabled = enabled
    for console in _consoles.values():
        console.no_color = not enabled or os.environ.get("NO_COLOR", "") != ""
