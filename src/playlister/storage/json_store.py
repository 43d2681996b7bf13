"""JSON file and in-memory playlist stores."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, List, Optional, Sequence

from playlister.playlist import Playlist, PlaylistStoreError

from .records import PlaylistRecord

DEFAULT_LISTS_PATH = Path(__file__).with_name("default_lists.json")


def parse_library(payload: Any) -> List[PlaylistRecord]:
    """Turn a decoded ``{"playlists": [...]}`` document into records."""

    if not isinstance(payload, dict) or not isinstance(
        payload.get("playlists"), list
    ):
        raise PlaylistStoreError("Expected an object with a 'playlists' list")
    return [PlaylistRecord.from_mapping(entry) for entry in payload["playlists"]]


def dump_library(records: Sequence[PlaylistRecord]) -> str:
    return json.dumps(
        {"playlists": [record.to_mapping() for record in records]},
        indent=2,
        ensure_ascii=False,
    )


class JsonPlaylistStore:
    """Stores the whole library in one human-diffable JSON file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def load_all(self) -> Optional[List[PlaylistRecord]]:
        if not self.path.exists():
            return None
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PlaylistStoreError(f"Cannot read {self.path}: {exc}") from exc
        return parse_library(payload)

    def save_all(self, playlists: Sequence[Playlist]) -> None:
        text = dump_library([PlaylistRecord.from_playlist(p) for p in playlists])
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text + "\n")
            os.replace(tmp_name, self.path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise PlaylistStoreError(f"Cannot write {self.path}: {exc}") from exc

    def set_aside(self) -> Optional[Path]:
        """Move an unreadable library file out of the way; return its new path."""

        if not self.path.exists():
            return None
        target = self.path.with_name(self.path.name + ".corrupt")
        try:
            os.replace(self.path, target)
        except OSError as exc:
            raise PlaylistStoreError(f"Cannot move {self.path} aside: {exc}") from exc
        return target


class MemoryPlaylistStore:
    """Keeps saved records in memory; handy for headless sessions."""

    def __init__(self, records: Optional[Sequence[PlaylistRecord]] = None) -> None:
        self.records: Optional[List[PlaylistRecord]] = (
            None if records is None else list(records)
        )
        self.save_count = 0

    def load_all(self) -> Optional[List[PlaylistRecord]]:
        if self.records is None:
            return None
        return [PlaylistRecord.from_mapping(r.to_mapping()) for r in self.records]

    def save_all(self, playlists: Sequence[Playlist]) -> None:
        self.records = [PlaylistRecord.from_playlist(p) for p in playlists]
        self.save_count += 1


def load_default_playlists(path: str | os.PathLike[str] | None = None) -> List[PlaylistRecord]:
    """Read the starter library shipped with the package."""

    source = Path(path) if path is not None else DEFAULT_LISTS_PATH
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise PlaylistStoreError(f"Cannot read default playlists: {exc}") from exc
    return parse_library(payload)


__all__ = [
    "DEFAULT_LISTS_PATH",
    "JsonPlaylistStore",
    "MemoryPlaylistStore",
    "dump_library",
    "load_default_playlists",
    "parse_library",
]
