"""Editing session: owns the library, the active playlist, and its history."""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence, Set, Tuple, TypeVar

from playlister.playlist import (
    NoActivePlaylistError,
    Playlist,
    PlaylistBuilder,
    PlaylistIntegrityError,
    Song,
    SongFields,
    SongInput,
    UnknownPlaylistError,
)
from playlister.runtime import telemetry
from playlister.storage import (
    MemoryPlaylistStore,
    PlaylistRecord,
    PlaylistStore,
    load_default_playlists,
)
from playlister.transactions import (
    CreateSong,
    EditSong,
    MoveSong,
    RemoveSong,
    SongTransaction,
    TransactionStack,
)

from .snapshot import PlaylistSummary, SessionHooks, SessionSnapshot

UNTITLED = "Untitled"

T = TypeVar("T")


class EditingSession:
    """Entry point for every edit the user can make.

    Only the active playlist can be edited, and its undo history does not
    survive switching to another playlist or closing it. After every change
    the session renders through ``hooks`` and saves through ``store``; a
    failing store is logged and remembered in ``last_persist_error`` but never
    rolls back the in-memory edit.
    """

    def __init__(
        self,
        *,
        store: PlaylistStore | None = None,
        hooks: SessionHooks | None = None,
        builder: PlaylistBuilder | None = None,
        stack: TransactionStack | None = None,
        logger_name: str | None = "playlister.session",
    ) -> None:
        self.store: PlaylistStore = store if store is not None else MemoryPlaylistStore()
        self.hooks = hooks or SessionHooks()
        self.builder = builder or PlaylistBuilder()
        self.stack = stack or TransactionStack(logger_name="playlister.transactions")
        self.last_persist_error: Optional[BaseException] = None
        self._playlists: List[Playlist] = []
        self._active: Optional[Playlist] = None
        self._quarantined: Set[int] = set()
        self._logger_name = logger_name

    # -- queries -------------------------------------------------------

    @property
    def playlists(self) -> Tuple[Playlist, ...]:
        return tuple(self._playlists)

    @property
    def active(self) -> Optional[Playlist]:
        return self._active

    def has_active(self) -> bool:
        return self._active is not None

    def can_undo(self) -> bool:
        return self.stack.can_undo()

    def can_redo(self) -> bool:
        return self.stack.can_redo()

    def get_playlist(self, playlist_id: int) -> Playlist:
        for playlist in self._playlists:
            if playlist.id == playlist_id:
                return playlist
        raise UnknownPlaylistError(
            f"No playlist with id {playlist_id}", playlist_id=playlist_id
        )

    def has_playlist_named(self, name: str) -> bool:
        return any(playlist.name == name for playlist in self._playlists)

    def snapshot(self, *, last_action: Optional[str] = None) -> SessionSnapshot:
        active = self._active
        return SessionSnapshot(
            active_id=active.id if active is not None else None,
            active_name=active.name if active is not None else None,
            can_undo=self.stack.can_undo(),
            can_redo=self.stack.can_redo(),
            songs=active.fingerprint() if active is not None else (),
            playlists=tuple(
                PlaylistSummary(id=p.id, name=p.name, size=len(p))
                for p in self._playlists
            ),
            last_action=last_action,
        )

    # -- library -------------------------------------------------------

    def load(
        self,
        *,
        defaults: Optional[Sequence[PlaylistRecord]] = None,
        use_defaults: bool = True,
    ) -> bool:
        """Restore the library from the store.

        Falls back to ``defaults`` (or the bundled starter lists) when the
        store has nothing saved. Returns ``True`` if saved data was found.
        """

        with telemetry.span(
            "session::load", logger_name=self._logger_name, component="session"
        ) as handle:
            records = self.store.load_all()
            restored = records is not None
            if records is None:
                if defaults is not None:
                    records = list(defaults)
                elif use_defaults:
                    records = load_default_playlists()
                else:
                    records = []
            handle.add_metadata("restored", restored)
            handle.add_metadata("playlists", len(records))
            self._restore(records)
        self._changed("load", persist=False)
        return restored

    def reset(self, records: Sequence[PlaylistRecord]) -> None:
        """Replace the library with ``records`` without consulting the store."""

        self._restore(records)
        self._changed("reset", persist=False)

    def _restore(self, records: Iterable[PlaylistRecord]) -> None:
        """Replace the library with ``records``; on failure the old library stays.

        Ids issued while building a rejected library are released again, so a
        later ``load`` of a repaired store can restore them.
        """

        records = list(records)
        with_ids = [record for record in records if record.id is not None]
        seen: Set[int] = set()
        for record in with_ids:
            if record.id in seen:
                raise PlaylistIntegrityError(
                    f"Saved library repeats playlist id {record.id}",
                    playlist_id=record.id,
                )
            seen.add(record.id)

        previous = [playlist.id for playlist in self._playlists]
        self.builder.release(previous)
        playlists: List[Playlist] = []
        try:
            for record in with_ids:
                playlists.append(
                    self.builder.build_with_id(record.id, record.name, record.songs)
                )
        except PlaylistIntegrityError:
            self.builder.release(playlist.id for playlist in playlists)
            self.builder.reserve(previous)
            raise
        self.builder.sync_next_id(seen)
        playlists.extend(
            self.builder.build(record.name, record.songs)
            for record in records
            if record.id is None
        )

        self._active = None
        self.stack.clear()
        self._playlists = playlists
        self._sort()

    def add_playlist(
        self,
        name: str = UNTITLED,
        songs: Iterable[SongInput] = (),
        *,
        select: bool = False,
    ) -> Playlist:
        playlist = self.builder.build(name or UNTITLED, songs)
        self._playlists.append(playlist)
        self._sort()
        if select:
            self._select(playlist)
        self._changed("add_playlist")
        return playlist

    def duplicate_playlist(self, playlist_id: int, *, select: bool = False) -> Playlist:
        source = self.get_playlist(playlist_id)
        return self.add_playlist(f"{source.name} (copy)", source.songs, select=select)

    def delete_playlist(self, playlist_id: int) -> Playlist:
        playlist = self.get_playlist(playlist_id)
        self._playlists.remove(playlist)
        if playlist is self._active:
            self._active = None
            self.stack.clear()
        self._changed("delete_playlist")
        return playlist

    def rename_active(self, name: str) -> None:
        playlist = self._require_active()
        playlist.rename(name or UNTITLED)
        self._sort()
        self._changed("rename_playlist")

    def select_playlist(self, playlist_id: int) -> Playlist:
        if self._active is not None and self._active.id == playlist_id:
            return self._active
        if playlist_id in self._quarantined:
            raise PlaylistIntegrityError(
                f"Playlist {playlist_id} failed an integrity check and is read-only",
                playlist_id=playlist_id,
            )
        playlist = self.get_playlist(playlist_id)
        self._select(playlist)
        self._changed("select_playlist")
        return playlist

    def close_playlist(self) -> None:
        if self._active is None:
            return
        self._active = None
        self.stack.clear()
        self._changed("close_playlist")

    # -- song edits ----------------------------------------------------

    def create_song(
        self, index: Optional[int] = None, song: Optional[Song] = None
    ) -> CreateSong:
        playlist = self._require_active()
        position = len(playlist) if index is None else index
        transaction = CreateSong(playlist, position, song or Song.untitled())
        self._submit(transaction)
        return transaction

    def remove_song(self, index: int) -> RemoveSong:
        transaction = RemoveSong.capture(self._require_active(), index)
        self._submit(transaction)
        return transaction

    def move_song(self, from_index: int, to_index: int) -> MoveSong:
        transaction = MoveSong(self._require_active(), from_index, to_index)
        self._submit(transaction)
        return transaction

    def edit_song(self, index: int, fields: SongFields) -> EditSong:
        transaction = EditSong.capture(self._require_active(), index, fields)
        self._submit(transaction)
        return transaction

    def undo(self) -> SongTransaction:
        transaction = self._guard(self.stack.undo)
        self._changed(f"undo {transaction.describe()}")
        return transaction

    def redo(self) -> SongTransaction:
        transaction = self._guard(self.stack.redo)
        self._changed(f"redo {transaction.describe()}")
        return transaction

    # -- internals -----------------------------------------------------

    def _require_active(self) -> Playlist:
        if self._active is None:
            raise NoActivePlaylistError("No playlist is selected")
        return self._active

    def _select(self, playlist: Playlist) -> None:
        self._active = playlist
        self.stack.clear()

    def _submit(self, transaction: SongTransaction) -> None:
        self._guard(lambda: self.stack.submit(transaction))
        self._changed(transaction.describe())

    def _guard(self, operation: Callable[[], T]) -> T:
        try:
            return operation()
        except PlaylistIntegrityError as exc:
            self._quarantine(exc)
            raise

    def _quarantine(self, exc: PlaylistIntegrityError) -> None:
        playlist = self._active
        if playlist is not None:
            self._quarantined.add(playlist.id)
            exc.playlist_id = playlist.id
        self._active = None
        self.stack.clear()
        telemetry.log_failure(
            "session.integrity",
            exc,
            data={"playlist": exc.playlist_id},
            logger_name=self._logger_name,
        )
        self.hooks.handle_event("session.integrity", exc)
        self.hooks.render(self.snapshot(last_action="integrity failure"))

    def _sort(self) -> None:
        self._playlists.sort(key=lambda playlist: playlist.name.upper())

    def _changed(self, action: str, *, persist: bool = True) -> None:
        snapshot = self.snapshot(last_action=action)
        telemetry.record_event(
            "session.changed",
            level="debug",
            data={
                "action": action,
                "active": snapshot.active_id,
                "can_undo": snapshot.can_undo,
                "can_redo": snapshot.can_redo,
            },
            logger_name=self._logger_name,
        )
        self.hooks.render(snapshot)
        if persist:
            self._persist()

    def _persist(self) -> None:
        try:
            self.store.save_all(self.playlists)
        except Exception as exc:
            self.last_persist_error = exc
            telemetry.log_failure(
                "session.persist", exc, logger_name=self._logger_name
            )
            self.hooks.handle_event("session.persist_failed", exc)
        else:
            self.last_persist_error = None


__all__ = ["EditingSession", "UNTITLED"]
