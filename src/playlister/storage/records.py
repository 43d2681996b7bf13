"""Persisted playlist records and the store protocol."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

from playlister.playlist import Playlist, PlaylistStoreError


@dataclass(slots=True)
class PlaylistRecord:
    """Plain-data form of a playlist as it appears on disk."""

    id: Optional[int]
    name: str
    songs: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_playlist(cls, playlist: Playlist) -> "PlaylistRecord":
        return cls(
            id=playlist.id,
            name=playlist.name,
            songs=[song.to_record() for song in playlist],
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PlaylistRecord":
        if not isinstance(data, Mapping):
            raise PlaylistStoreError(
                f"Playlist record must be an object, got {type(data).__name__}"
            )
        try:
            name = str(data["name"])
        except KeyError as exc:
            raise PlaylistStoreError("Playlist record is missing 'name'") from exc
        raw_id = data.get("id")
        try:
            playlist_id = None if raw_id is None else int(raw_id)
        except (TypeError, ValueError) as exc:
            raise PlaylistStoreError(
                f"Playlist '{name}' has a malformed id: {raw_id!r}"
            ) from exc
        songs = data.get("songs") or []
        if not isinstance(songs, list):
            raise PlaylistStoreError(f"Playlist '{name}' has malformed songs")
        if not all(isinstance(song, Mapping) for song in songs):
            raise PlaylistStoreError(f"Playlist '{name}' has a malformed song entry")
        return cls(id=playlist_id, name=name, songs=[dict(song) for song in songs])

    def to_mapping(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "songs": list(self.songs)}


class PlaylistStore(Protocol):
    """Persistence collaborator used by the editing session."""

    def load_all(self) -> Optional[List[PlaylistRecord]]:
        """Return saved playlists in order, or ``None`` when nothing is saved."""
        ...

    def save_all(self, playlists: Sequence[Playlist]) -> None:
        """Replace the saved library with ``playlists``."""
        ...


__all__ = ["PlaylistRecord", "PlaylistStore"]
