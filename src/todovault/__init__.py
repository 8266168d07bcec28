"""todovault - local-first to-do tracker backed by an embedded SQLite vault."""

__version__ = "0.3.0"
