"""Exception hierarchy shared by the playlist, transaction, and session layers."""

from __future__ import annotations


class PlaylisterError(RuntimeError):
    """Base class for every error raised by the editor core."""


class PlaylistUsageError(PlaylisterError):
    """The caller asked for something the current state cannot do.

    Usage errors never leave partial state behind: the rejected operation is
    not recorded in any history.
    """


class PlaylistIndexError(PlaylistUsageError):
    """Raised when a song index falls outside the playlist bounds."""

    def __init__(self, message: str, *, index: int, size: int) -> None:
        super().__init__(message)
        self.index = index
        self.size = size


class NoActivePlaylistError(PlaylistUsageError):
    """Raised when an edit is requested while no playlist is selected."""


class UnknownPlaylistError(PlaylistUsageError):
    def __init__(self, message: str, *, playlist_id: int) -> None:
        super().__init__(message)
        self.playlist_id = playlist_id


class HistoryEmptyError(PlaylistUsageError):
    """Raised when undo/redo is requested with nothing to replay."""


class NothingToUndoError(HistoryEmptyError):
    pass


class NothingToRedoError(HistoryEmptyError):
    pass


class PlaylistIntegrityError(PlaylisterError):
    """A broken invariant: the playlist can no longer be trusted."""

    def __init__(self, message: str, *, playlist_id: int | None = None) -> None:
        super().__init__(message)
        self.playlist_id = playlist_id


class PlaylistStoreError(PlaylisterError):
    """Raised by stores when persisted data cannot be read or written."""


__all__ = [
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
