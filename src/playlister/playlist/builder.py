"""Playlist construction and id allocation."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Set, Union

from playlister.runtime import telemetry

from .errors import PlaylistIntegrityError
from .playlist import Playlist
from .song import Song, SongFields, coerce_song

SongInput = Union[Song, SongFields, Mapping[str, Any]]


class PlaylistBuilder:
    """Sole allocator of playlist ids.

    One builder is created per editing session and passed in explicitly. Ids
    handed out by :meth:`build` are strictly increasing. When restoring saved
    playlists with :meth:`build_with_id`, call :meth:`sync_next_id` afterwards
    so later :meth:`build` calls cannot collide with a restored id.
    """

    def __init__(self, *, next_id: int = 0) -> None:
        self._next_id = next_id
        self._issued: Set[int] = set()

    @property
    def next_id(self) -> int:
        return self._next_id

    def build(self, name: str, songs: Iterable[SongInput] = ()) -> Playlist:
        playlist_id = self._next_id
        self._next_id += 1
        return self.build_with_id(playlist_id, name, songs)

    def build_with_id(
        self, playlist_id: int, name: str, songs: Iterable[SongInput] = ()
    ) -> Playlist:
        if playlist_id in self._issued:
            raise PlaylistIntegrityError(
                f"Playlist id {playlist_id} was already issued",
                playlist_id=playlist_id,
            )
        self._issued.add(playlist_id)
        playlist = Playlist(playlist_id, name, [coerce_song(song) for song in songs])
        telemetry.record_event(
            "playlist.build",
            level="debug",
            data={"id": playlist_id, "name": name, "songs": len(playlist)},
        )
        return playlist

    def release(self, ids: Iterable[int]) -> None:
        """Forget issued ids so a reload may restore them again.

        The counter is left alone; released ids are never handed out by
        :meth:`build`.
        """

        self._issued.difference_update(ids)

    def reserve(self, ids: Iterable[int]) -> None:
        """Mark ids as issued again, undoing an earlier :meth:`release`."""

        self._issued.update(ids)

    def sync_next_id(self, ids: Iterable[int]) -> int:
        """Advance the counter past every id in ``ids``; never moves it back."""

        highest = max(ids, default=-1)
        if highest >= self._next_id:
            self._next_id = highest + 1
        return self._next_id


__all__ = ["PlaylistBuilder", "SongInput"]
