"""Textual front end for the playlist editor."""

from .controller import KeyResult, TextualPlaylistAdapter, TextualUIHooks

__all__ = ["KeyResult", "TextualPlaylistAdapter", "TextualUIHooks"]
