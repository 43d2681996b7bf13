from __future__ import annotations

from dataclasses import dataclass

import pytest

from playlister.playlist import (
    NothingToRedoError,
    NothingToUndoError,
    Playlist,
    PlaylistIndexError,
    PlaylistIntegrityError,
    Song,
)
from playlister.transactions import CreateSong, MoveSong, RemoveSong, TransactionStack


def make_song(title: str) -> Song:
    return Song(title=title, artist="artist", youtube_id="yt", year=2001)


def make_playlist(*titles: str) -> Playlist:
    return Playlist(0, "mix", [make_song(title) for title in titles])


def titles(playlist: Playlist) -> list[str]:
    return [song.title for song in playlist]


@dataclass(slots=True, eq=False)
class ForgetfulCreate(CreateSong):
    """Create whose invert does nothing, to exercise integrity checks."""

    def invert(self) -> None:
        return None


def test_submit_applies_and_records() -> None:
    playlist = make_playlist()
    stack = TransactionStack()

    stack.submit(CreateSong(playlist, 0, make_song("a")))

    assert titles(playlist) == ["a"]
    assert stack.can_undo() is True
    assert stack.can_redo() is False
    assert len(stack.done) == 1


def test_undo_and_redo_move_between_histories() -> None:
    playlist = make_playlist()
    stack = TransactionStack()
    first = CreateSong(playlist, 0, make_song("a"))
    second = CreateSong(playlist, 1, make_song("b"))
    stack.submit(first)
    stack.submit(second)

    assert stack.undo() is second
    assert titles(playlist) == ["a"]
    assert stack.undone == (second,)
    assert stack.undo() is first
    assert titles(playlist) == []

    assert stack.redo() is first
    assert stack.redo() is second
    assert titles(playlist) == ["a", "b"]
    assert stack.done == (first, second)
    assert stack.can_redo() is False


def test_new_submit_discards_redo_history() -> None:
    playlist = make_playlist()
    stack = TransactionStack()
    stack.submit(CreateSong(playlist, 0, make_song("t1")))
    stack.submit(CreateSong(playlist, 1, make_song("t2")))
    stack.undo()

    stack.submit(CreateSong(playlist, 1, make_song("t3")))

    assert stack.can_redo() is False
    assert titles(playlist) == ["t1", "t3"]
    with pytest.raises(NothingToRedoError):
        stack.redo()


def test_undo_on_empty_history_changes_nothing() -> None:
    playlist = make_playlist("a")
    stack = TransactionStack()

    with pytest.raises(NothingToUndoError):
        stack.undo()
    with pytest.raises(NothingToRedoError):
        stack.redo()

    assert titles(playlist) == ["a"]
    assert stack.done == ()
    assert stack.undone == ()


def test_rejected_submit_is_not_recorded() -> None:
    playlist = make_playlist("a")
    stack = TransactionStack()
    stack.submit(CreateSong(playlist, 1, make_song("b")))
    stack.undo()

    with pytest.raises(PlaylistIndexError):
        stack.submit(MoveSong(playlist, 0, 5))

    assert titles(playlist) == ["a"]
    assert stack.done == ()
    assert stack.can_redo() is True


def test_clear_forgets_history_without_replaying() -> None:
    playlist = make_playlist()
    stack = TransactionStack()
    stack.submit(CreateSong(playlist, 0, make_song("a")))
    stack.submit(CreateSong(playlist, 0, make_song("b")))
    stack.undo()

    stack.clear()

    assert titles(playlist) == ["a"]
    assert stack.can_undo() is False
    assert stack.can_redo() is False


def test_broken_invert_is_an_integrity_error() -> None:
    playlist = make_playlist()
    stack = TransactionStack()
    stack.submit(ForgetfulCreate(playlist, 0, make_song("a")))

    with pytest.raises(PlaylistIntegrityError) as info:
        stack.undo()

    assert info.value.playlist_id == playlist.id
    assert stack.can_undo() is False
    assert stack.can_redo() is False


def test_outside_mutation_is_detected_on_undo() -> None:
    playlist = make_playlist("a", "b")
    stack = TransactionStack()
    stack.submit(RemoveSong.capture(playlist, 1))
    playlist.remove_song(0)

    with pytest.raises(PlaylistIntegrityError):
        stack.undo()


def test_replay_usage_error_becomes_integrity_error() -> None:
    playlist = make_playlist("a")
    stack = TransactionStack()
    stack.submit(RemoveSong.capture(playlist, 0))
    stack.undo()
    playlist.replace_songs([])

    with pytest.raises(PlaylistIntegrityError) as info:
        stack.redo()

    assert isinstance(info.value.__cause__, PlaylistIndexError)


def test_verification_can_be_disabled() -> None:
    playlist = make_playlist()
    stack = TransactionStack(verify=False)
    stack.submit(ForgetfulCreate(playlist, 0, make_song("a")))

    stack.undo()

    assert titles(playlist) == ["a"]
    assert stack.can_redo() is True


def test_peek_reports_next_transactions() -> None:
    playlist = make_playlist()
    stack = TransactionStack()
    create = CreateSong(playlist, 0, make_song("a"))

    assert stack.peek_undo() is None
    stack.submit(create)
    assert stack.peek_undo() is create
    stack.undo()
    assert stack.peek_redo() is create
