"""Persistence collaborators for the editing session."""

from .json_store import (
    DEFAULT_LISTS_PATH,
    JsonPlaylistStore,
    MemoryPlaylistStore,
    dump_library,
    load_default_playlists,
    parse_library,
)
from .records import PlaylistRecord, PlaylistStore

__all__ = [
    "PlaylistRecord",
    "PlaylistStore",
    "JsonPlaylistStore",
    "MemoryPlaylistStore",
    "DEFAULT_LISTS_PATH",
    "dump_library",
    "load_default_playlists",
    "parse_library",
]
