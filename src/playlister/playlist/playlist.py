"""Ordered, named playlist container."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Tuple

from .song import Song, SongFields
from .validation import ensure_index


class Playlist:
    """Named sequence of songs with a fixed id.

    Playlists are built by :class:`~playlister.playlist.builder.PlaylistBuilder`,
    which owns id allocation. The order of ``songs`` is the only ordering that
    matters; songs carry no index of their own.
    """

    __slots__ = ("_id", "name", "_songs")

    def __init__(self, playlist_id: int, name: str, songs: Iterable[Song] = ()) -> None:
        self._id = playlist_id
        self.name = name
        self._songs: List[Song] = list(songs)

    @property
    def id(self) -> int:
        return self._id

    @property
    def songs(self) -> Tuple[Song, ...]:
        return tuple(self._songs)

    def __len__(self) -> int:
        return len(self._songs)

    def __iter__(self) -> Iterator[Song]:
        return iter(tuple(self._songs))

    def __repr__(self) -> str:
        return f"Playlist(id={self._id!r}, name={self.name!r}, songs={len(self._songs)})"

    def song_at(self, index: int) -> Song:
        return self._songs[ensure_index(self._songs, index)]

    def set_song_at(self, index: int, song: Song) -> None:
        self._songs[ensure_index(self._songs, index)] = song

    def insert_song(self, index: int, song: Song) -> None:
        self._songs.insert(ensure_index(self._songs, index, allow_end=True), song)

    def remove_song(self, index: int) -> Song:
        return self._songs.pop(ensure_index(self._songs, index))

    def move_song(self, from_index: int, to_index: int) -> None:
        """Move a song by removing it, then inserting into the shortened list.

        ``to_index`` is interpreted against the list *after* removal, so
        ``move_song(a, b)`` is undone exactly by ``move_song(b, a)``.
        """

        ensure_index(self._songs, from_index)
        ensure_index(self._songs, to_index)
        song = self._songs.pop(from_index)
        self._songs.insert(to_index, song)

    def rename(self, name: str) -> None:
        self.name = name

    def replace_songs(self, songs: Iterable[Song]) -> None:
        self._songs = list(songs)

    def fingerprint(self) -> Tuple[SongFields, ...]:
        """Field-wise view of the songs, in order, for equality checks."""

        return tuple(song.fields() for song in self._songs)

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self._id,
            "name": self.name,
            "songs": [song.to_record() for song in self._songs],
        }


__all__ = ["Playlist"]
