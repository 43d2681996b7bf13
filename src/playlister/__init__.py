"""Undoable playlist editing engine with a Textual front end."""

__all__ = [
    "adapters",
    "playlist",
    "runtime",
    "session",
    "storage",
    "transactions",
]

__version__ = "0.1.0"
