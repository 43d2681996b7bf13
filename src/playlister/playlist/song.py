"""Song records stored inside playlists."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Union

Year = Union[int, str]

# Keys used by the persisted JSON records.
_RECORD_KEYS = {
    "title": "title",
    "artist": "artist",
    "youtube_id": "youTubeId",
    "year": "year",
}


@dataclass(frozen=True, slots=True)
class SongFields:
    """Full set of song fields, used as old/new payloads for edits."""

    title: str
    artist: str
    youtube_id: str
    year: Year


@dataclass(slots=True)
class Song:
    """A single playlist entry.

    Songs have no identity beyond their position in a playlist. Anything that
    must hold on to a song across an edit keeps a ``clone()`` instead of the
    live object.
    """

    title: str
    artist: str
    youtube_id: str
    year: Year = ""

    @classmethod
    def untitled(cls) -> "Song":
        return cls(title="Untitled", artist="???", youtube_id="dQw4w9WgXcQ", year=2000)

    @classmethod
    def from_fields(cls, fields: SongFields) -> "Song":
        return cls(
            title=fields.title,
            artist=fields.artist,
            youtube_id=fields.youtube_id,
            year=fields.year,
        )

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Song":
        values = {
            attr: record.get(key, "") for attr, key in _RECORD_KEYS.items()
        }
        return cls(**values)

    def clone(self) -> "Song":
        return Song(
            title=self.title,
            artist=self.artist,
            youtube_id=self.youtube_id,
            year=self.year,
        )

    def fields(self) -> SongFields:
        return SongFields(
            title=self.title,
            artist=self.artist,
            youtube_id=self.youtube_id,
            year=self.year,
        )

    def to_record(self) -> Dict[str, Any]:
        return {key: getattr(self, attr) for attr, key in _RECORD_KEYS.items()}


def coerce_song(value: Union[Song, SongFields, Mapping[str, Any]]) -> Song:
    """Return a fresh ``Song`` built from a song, a field record, or a mapping."""

    if isinstance(value, Song):
        return value.clone()
    if isinstance(value, SongFields):
        return Song.from_fields(value)
    return Song.from_record(value)


__all__ = ["Song", "SongFields", "Year", "coerce_song"]
