from __future__ import annotations

import itertools
from typing import Callable, Iterator

import pytest

from playlister.playlist import Playlist, PlaylistIndexError, Song, SongFields
from playlister.transactions import (
    TRANSACTION_TYPES,
    CreateSong,
    EditSong,
    MoveSong,
    RemoveSong,
    SongTransaction,
)


def make_song(title: str) -> Song:
    return Song(title=title, artist="artist", youtube_id=f"id-{title}", year=2000)


def make_playlist(size: int) -> Playlist:
    return Playlist(7, "mix", [make_song(str(i)) for i in range(size)])


def every_transaction(playlist: Playlist) -> Iterator[SongTransaction]:
    size = len(playlist)
    for index in range(size + 1):
        yield CreateSong(playlist, index, make_song("new"))
    for index in range(size):
        yield RemoveSong.capture(playlist, index)
        yield EditSong.capture(
            playlist, index, SongFields("edited", "someone", "xyz", 1984)
        )
    for source, target in itertools.product(range(size), repeat=2):
        yield MoveSong(playlist, source, target)


@pytest.mark.parametrize("size", [0, 1, 2, 5])
def test_every_transaction_round_trips(size: int) -> None:
    playlist = make_playlist(size)
    before = playlist.fingerprint()

    for transaction in every_transaction(playlist):
        transaction.apply()
        transaction.invert()
        assert playlist.fingerprint() == before, transaction.describe()


def test_round_trip_grid_covers_every_variant() -> None:
    seen = {type(t) for t in every_transaction(make_playlist(3))}

    assert seen == set(TRANSACTION_TYPES)


def test_transactions_can_cycle_apply_and_invert() -> None:
    playlist = make_playlist(3)
    transaction = MoveSong(playlist, 0, 2)

    for _ in range(3):
        transaction.apply()
        assert [s.title for s in playlist] == ["1", "2", "0"]
        transaction.invert()
        assert [s.title for s in playlist] == ["0", "1", "2"]


def test_create_inserts_a_copy_of_its_song() -> None:
    playlist = make_playlist(0)
    song = make_song("new")
    transaction = CreateSong(playlist, 0, song)

    transaction.apply()
    song.title = "mutated"

    assert playlist.song_at(0).title == "new"


def test_remove_snapshot_is_taken_at_construction() -> None:
    playlist = make_playlist(2)
    live = playlist.song_at(0)
    held_copy = live.clone()
    transaction = RemoveSong.capture(playlist, 0)

    held_copy.title = "edited elsewhere"
    live.title = "edited in place"
    transaction.apply()
    transaction.invert()

    assert playlist.song_at(0).title == "0"


def test_remove_restores_a_fresh_object_each_time() -> None:
    playlist = make_playlist(1)
    transaction = RemoveSong.capture(playlist, 0)

    transaction.apply()
    transaction.invert()
    first = playlist.song_at(0)
    transaction.apply()
    transaction.invert()

    assert playlist.song_at(0) is not first
    assert playlist.song_at(0) == first


def test_edit_replaces_fields_in_place() -> None:
    playlist = make_playlist(3)
    new = SongFields("Title", "Artist", "yt", "1999")
    transaction = EditSong.capture(playlist, 1, new)

    transaction.apply()

    assert playlist.song_at(1).fields() == new
    assert [s.title for s in playlist] == ["0", "Title", "2"]
    transaction.invert()
    assert playlist.song_at(1).fields() == make_song("1").fields()


@pytest.mark.parametrize(
    "factory",
    [
        lambda p: CreateSong(p, 5, make_song("x")),
        lambda p: RemoveSong(p, 3, make_song("x")),
        lambda p: MoveSong(p, 0, 3),
        lambda p: EditSong(p, 3, make_song("x").fields(), make_song("y").fields()),
    ],
)
def test_out_of_range_apply_leaves_playlist_alone(
    factory: Callable[[Playlist], SongTransaction],
) -> None:
    playlist = make_playlist(3)
    before = playlist.fingerprint()

    with pytest.raises(PlaylistIndexError):
        factory(playlist).apply()

    assert playlist.fingerprint() == before


def test_describe_mentions_positions() -> None:
    playlist = make_playlist(2)

    assert MoveSong(playlist, 0, 1).describe() == "move 1 -> 2"
    assert RemoveSong.capture(playlist, 1).describe() == "remove '1' from 2"
