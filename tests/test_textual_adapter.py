from __future__ import annotations

from typing import List, Tuple

from playlister.adapters.textual import TextualPlaylistAdapter, TextualUIHooks
from playlister.adapters.textual.controller import format_library, format_songs
from playlister.session import EditingSession, SessionSnapshot
from playlister.storage import MemoryPlaylistStore


def make_adapter() -> Tuple[TextualPlaylistAdapter, List[Tuple[SessionSnapshot, int]], List[str]]:
    renders: List[Tuple[SessionSnapshot, int]] = []
    statuses: List[str] = []
    session = EditingSession(store=MemoryPlaylistStore())
    hooks = TextualUIHooks(
        render=lambda snapshot, cursor: renders.append((snapshot, cursor)),
        update_status=statuses.append,
    )
    return TextualPlaylistAdapter(session, hooks), renders, statuses


def type_command(adapter: TextualPlaylistAdapter, line: str):
    adapter.handle_textual_key(":", text=":")
    for char in line:
        adapter.handle_textual_key(char, text=char)
    return adapter.handle_textual_key("ENTER")


def test_new_playlist_and_add_song() -> None:
    adapter, renders, _ = make_adapter()

    adapter.handle_textual_key("n")
    adapter.handle_textual_key("a")

    snapshot, cursor = renders[-1]
    assert snapshot.active_name == "Untitled"
    assert [song.title for song in snapshot.songs] == ["Untitled"]
    assert cursor == 0
    assert snapshot.can_undo is True


def test_undo_and_redo_keys() -> None:
    adapter, renders, statuses = make_adapter()
    adapter.handle_textual_key("n")
    adapter.handle_textual_key("a")

    adapter.handle_textual_key("u")
    assert renders[-1][0].songs == ()
    assert statuses[-1].startswith("undo add")

    adapter.handle_textual_key("y", modifiers=("ctrl",))
    assert len(renders[-1][0].songs) == 1


def test_usage_errors_become_status_text() -> None:
    adapter, _, statuses = make_adapter()

    result = adapter.handle_textual_key("x")

    assert result.status == "usage_error"
    assert statuses[-1] == "No playlist is selected"

    adapter.handle_textual_key("n")
    result = adapter.handle_textual_key("u")
    assert result.status == "usage_error"
    assert statuses[-1] == "Nothing to undo"


def test_move_keys_follow_the_song() -> None:
    adapter, renders, _ = make_adapter()
    adapter.handle_textual_key("n")
    adapter.handle_textual_key("a")
    type_command(adapter, "title first")
    adapter.handle_textual_key("a")
    type_command(adapter, "title second")

    adapter.handle_textual_key("K")

    snapshot, cursor = renders[-1]
    assert [song.title for song in snapshot.songs] == ["second", "first"]
    assert cursor == 0
    assert adapter.handle_textual_key("K").status == "usage_error"


def test_command_line_edits_song_fields() -> None:
    adapter, renders, _ = make_adapter()
    adapter.handle_textual_key("n")
    adapter.handle_textual_key("a")

    result = type_command(adapter, "edit Blackbird|The Beatles|Man4Xw8Xypo|1968")

    assert result.status == "ok"
    song = renders[-1][0].songs[0]
    assert (song.title, song.artist, song.youtube_id, song.year) == (
        "Blackbird",
        "The Beatles",
        "Man4Xw8Xypo",
        1968,
    )


def test_command_line_rename_and_bad_command() -> None:
    adapter, renders, statuses = make_adapter()
    adapter.handle_textual_key("n")

    type_command(adapter, "rename Road Trip")
    assert renders[-1][0].active_name == "Road Trip"

    result = type_command(adapter, "bogus")
    assert result.status == "command_error"
    assert "bogus" in statuses[-1]


def test_escape_cancels_command_line() -> None:
    adapter, _, _ = make_adapter()
    adapter.handle_textual_key(":", text=":")
    adapter.handle_textual_key("n", text="n")

    result = adapter.handle_textual_key("ESC")

    assert result.status == "command_cancel"
    assert adapter.command_text is None


def test_cycle_close_and_delete_playlists() -> None:
    adapter, renders, _ = make_adapter()
    type_command(adapter, "new Beta")
    type_command(adapter, "new Alpha")
    adapter.handle_textual_key("c")
    assert renders[-1][0].active_id is None

    adapter.handle_textual_key("]")
    assert renders[-1][0].active_name == "Alpha"
    adapter.handle_textual_key("]")
    assert renders[-1][0].active_name == "Beta"

    adapter.handle_textual_key("D")
    assert [p.name for p in renders[-1][0].playlists] == ["Alpha"]


def test_formatters_mark_active_rows() -> None:
    adapter, renders, _ = make_adapter()
    type_command(adapter, "new Mix")
    adapter.handle_textual_key("a")
    snapshot, cursor = renders[-1]

    assert format_library(snapshot) == ["> Mix (1)"]
    assert format_songs(snapshot, cursor) == ["> 1. Untitled (2000) by ???"]


def test_command_key_without_command_line_is_ignored() -> None:
    adapter, _, _ = make_adapter()

    result = adapter._handle_command_key("x", "x")

    assert result.consumed is False
    assert result.status == "command_inactive"


def test_rename_empty_playlist_reports_stored_name() -> None:
    adapter, renders, _ = make_adapter()
    adapter.handle_textual_key("n")

    result = adapter.submit_command("rename")

    assert result.message == "renamed to Untitled"
    assert renders[-1][0].active_id is not None
