"""Editing session orchestrating playlists, history, and collaborators."""

from .session import UNTITLED, EditingSession
from .snapshot import PlaylistSummary, SessionHooks, SessionSnapshot

__all__ = [
    "EditingSession",
    "SessionHooks",
    "SessionSnapshot",
    "PlaylistSummary",
    "UNTITLED",
]
