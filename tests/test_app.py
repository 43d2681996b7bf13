from __future__ import annotations

import json
from pathlib import Path

import pytest

from playlister.adapters.textual.app import create_session, load_library
from playlister.session import EditingSession
from playlister.storage import MemoryPlaylistStore, PlaylistRecord


def test_load_library_reports_saved_library(tmp_path: Path) -> None:
    path = tmp_path / "library.json"
    path.write_text(
        json.dumps({"playlists": [{"id": 4, "name": "Saved", "songs": []}]}),
        encoding="utf-8",
    )
    session = create_session(path)

    status = load_library(session)

    assert [p.id for p in session.playlists] == [4]
    assert status.startswith("Loaded 1 playlists")


@pytest.mark.parametrize("content", ["{not json", json.dumps({"playlists": ["x"]})])
def test_unreadable_library_falls_back_and_is_kept(tmp_path: Path, content: str) -> None:
    path = tmp_path / "library.json"
    path.write_text(content, encoding="utf-8")
    session = create_session(path)

    status = load_library(session)

    assert "Could not load playlists" in status
    assert session.playlists
    assert (tmp_path / "library.json.corrupt").read_text(encoding="utf-8") == content

    session.add_playlist("After")
    assert "After" in path.read_text(encoding="utf-8")


def test_conflicting_ids_fall_back_to_empty_library() -> None:
    store = MemoryPlaylistStore(
        [PlaylistRecord(id=1, name="a"), PlaylistRecord(id=1, name="b")]
    )
    session = EditingSession(store=store)

    status = load_library(session, use_defaults=False)

    assert "repeats playlist id 1" in status
    assert session.playlists == ()
