"""Reversible song edits applied to a single playlist.

The variant set is closed: :data:`TRANSACTION_TYPES` lists every transaction
the editor can record. Each one keeps a non-owning reference to its playlist
and enough payload to invert itself exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Tuple, Type

from playlister.playlist import Playlist, Song, SongFields


@dataclass(slots=True, eq=False)
class SongTransaction:
    """Base class for song transactions; not recorded on its own."""

    playlist: Playlist

    label: ClassVar[str] = "transaction"

    def apply(self) -> None:  # pragma: no cover - abstract override
        raise NotImplementedError

    def invert(self) -> None:  # pragma: no cover - abstract override
        raise NotImplementedError

    def describe(self) -> str:
        return self.label


@dataclass(slots=True, eq=False)
class CreateSong(SongTransaction):
    index: int
    song: Song

    label: ClassVar[str] = "create_song"

    def __post_init__(self) -> None:
        self.song = self.song.clone()

    def apply(self) -> None:
        self.playlist.insert_song(self.index, self.song.clone())

    def invert(self) -> None:
        self.playlist.remove_song(self.index)

    def describe(self) -> str:
        return f"add '{self.song.title}' at {self.index + 1}"


@dataclass(slots=True, eq=False)
class RemoveSong(SongTransaction):
    """Remove the song at ``index``.

    ``song`` is cloned on construction, before the transaction is ever
    applied, so later edits to the live song (or to whatever object the
    caller passed in) cannot leak into the copy restored by ``invert``.
    """

    index: int
    song: Song

    label: ClassVar[str] = "remove_song"

    def __post_init__(self) -> None:
        self.song = self.song.clone()

    @classmethod
    def capture(cls, playlist: Playlist, index: int) -> "RemoveSong":
        return cls(playlist, index, playlist.song_at(index))

    def apply(self) -> None:
        self.playlist.remove_song(self.index)

    def invert(self) -> None:
        self.playlist.insert_song(self.index, self.song.clone())

    def describe(self) -> str:
        return f"remove '{self.song.title}' from {self.index + 1}"


@dataclass(slots=True, eq=False)
class MoveSong(SongTransaction):
    from_index: int
    to_index: int

    label: ClassVar[str] = "move_song"

    def apply(self) -> None:
        self.playlist.move_song(self.from_index, self.to_index)

    def invert(self) -> None:
        self.playlist.move_song(self.to_index, self.from_index)

    def describe(self) -> str:
        return f"move {self.from_index + 1} -> {self.to_index + 1}"


@dataclass(slots=True, eq=False)
class EditSong(SongTransaction):
    index: int
    old: SongFields
    new: SongFields

    label: ClassVar[str] = "edit_song"

    @classmethod
    def capture(cls, playlist: Playlist, index: int, new: SongFields) -> "EditSong":
        return cls(playlist, index, playlist.song_at(index).fields(), new)

    def apply(self) -> None:
        self.playlist.set_song_at(self.index, Song.from_fields(self.new))

    def invert(self) -> None:
        self.playlist.set_song_at(self.index, Song.from_fields(self.old))

    def describe(self) -> str:
        return f"edit '{self.old.title}' -> '{self.new.title}'"


TRANSACTION_TYPES: Tuple[Type[SongTransaction], ...] = (
    CreateSong,
    RemoveSong,
    MoveSong,
    EditSong,
)


__all__ = [
    "SongTransaction",
    "CreateSong",
    "RemoveSong",
    "MoveSong",
    "EditSong",
    "TRANSACTION_TYPES",
]
