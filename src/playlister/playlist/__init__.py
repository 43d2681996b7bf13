"""Playlist data model: songs, playlists, and the playlist builder."""

from .builder import PlaylistBuilder, SongInput
from .errors import (
    HistoryEmptyError,
    NoActivePlaylistError,
    NothingToRedoError,
    NothingToUndoError,
    PlaylisterError,
    PlaylistIndexError,
    PlaylistIntegrityError,
    PlaylistStoreError,
    PlaylistUsageError,
    UnknownPlaylistError,
)
from .playlist import Playlist
from .song import Song, SongFields, coerce_song
from .validation import ensure_index

__all__ = [
    "Song",
    "SongFields",
    "Playlist",
    "PlaylistBuilder",
    "SongInput",
    "coerce_song",
    "ensure_index",
    "PlaylisterError",
    "PlaylistUsageError",
    "PlaylistIndexError",
    "NoActivePlaylistError",
    "UnknownPlaylistError",
    "HistoryEmptyError",
    "NothingToUndoError",
    "NothingToRedoError",
    "PlaylistIntegrityError",
    "PlaylistStoreError",
]
