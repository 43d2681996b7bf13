"""Key and command-line handling that drives an EditingSession from Textual."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, List, Optional

from playlister.playlist import (
    NoActivePlaylistError,
    PlaylistIntegrityError,
    PlaylistUsageError,
    SongFields,
)
from playlister.session import EditingSession, SessionSnapshot


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    render: Callable[[SessionSnapshot, int], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[Optional[str]], None] = _noop
    log: Callable[[str], None] = _noop


@dataclass(slots=True)
class KeyResult:
    consumed: bool
    status: str = "ok"
    message: Optional[str] = None


# Command-line field names accepted by ``:title``, ``:artist`` and friends.
_FIELD_COMMANDS = {
    "title": "title",
    "artist": "artist",
    "youtube": "youtube_id",
    "year": "year",
}


def _parse_year(raw: str) -> int | str:
    text = raw.strip()
    return int(text) if text.isdigit() else text


def format_library(snapshot: SessionSnapshot) -> List[str]:
    lines = []
    for summary in snapshot.playlists:
        marker = ">" if summary.id == snapshot.active_id else " "
        lines.append(f"{marker} {summary.name} ({summary.size})")
    return lines


def format_songs(snapshot: SessionSnapshot, cursor: int) -> List[str]:
    lines = []
    for index, song in enumerate(snapshot.songs):
        marker = ">" if index == cursor else " "
        lines.append(f"{marker} {index + 1}. {song.title} ({song.year}) by {song.artist}")
    return lines


class TextualPlaylistAdapter:
    """Bridges key presses and ``:`` commands to an :class:`EditingSession`.

    Usage errors never escape ``handle_textual_key``; they are reported
    through ``update_status`` so the UI stays responsive.
    """

    def __init__(self, session: EditingSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self.cursor = 0
        self.command_text: Optional[str] = None
        self._last_snapshot = session.snapshot()
        session.hooks.render = self._on_render
        session.hooks.handle_event = self._on_session_event
        self._keymap: Dict[str, Callable[[], str]] = {
            "j": lambda: self._move_cursor(1),
            "DOWN": lambda: self._move_cursor(1),
            "k": lambda: self._move_cursor(-1),
            "UP": lambda: self._move_cursor(-1),
            "J": lambda: self._move_song(1),
            "K": lambda: self._move_song(-1),
            "a": self._add_song,
            "x": self._remove_song,
            "DELETE": self._remove_song,
            "u": self._undo,
            "CTRL+Z": self._undo,
            "U": self._redo,
            "CTRL+Y": self._redo,
            "n": self._new_playlist,
            "]": lambda: self._cycle_playlist(1),
            "[": lambda: self._cycle_playlist(-1),
            "c": self._close_playlist,
            "d": self._duplicate_playlist,
            "D": self._delete_playlist,
        }
        self._refresh()

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._last_snapshot

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> KeyResult:
        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        token = key
        if "CTRL" in normalized_modifiers:
            token = f"CTRL+{key.upper()}"
        self._log("key ->", key=token, text=text)

        if self.command_text is not None:
            result = self._handle_command_key(key, text)
        elif token == ":":
            self.command_text = ""
            self.hooks.show_command(self.command_text)
            result = KeyResult(consumed=True, status="command_start")
        else:
            action = self._keymap.get(token)
            if action is None:
                result = KeyResult(consumed=False, status="unbound")
            else:
                result = self._run(action)

        if result.message:
            self.hooks.update_status(result.message)
        self._log("result <-", status=result.status, message=result.message)
        return result

    def submit_command(self, line: str) -> KeyResult:
        """Execute an Ex-style command line without the leading colon."""

        parts = line.strip().split(maxsplit=1)
        if not parts:
            return KeyResult(consumed=True, status="command_empty")
        command = parts[0]
        argument = parts[1] if len(parts) > 1 else ""
        return self._run(lambda: self._dispatch_command(command, argument))

    # -- command line --------------------------------------------------

    def _handle_command_key(self, key: str, text: Optional[str]) -> KeyResult:
        if self.command_text is None:
            return KeyResult(consumed=False, status="command_inactive")
        if key == "ESC":
            self.command_text = None
            self.hooks.show_command(None)
            return KeyResult(consumed=True, status="command_cancel")
        if key == "ENTER":
            line = self.command_text
            self.command_text = None
            self.hooks.show_command(None)
            return self.submit_command(line)
        if key == "BACKSPACE":
            self.command_text = self.command_text[:-1]
        elif text:
            self.command_text += text
        self.hooks.show_command(self.command_text)
        return KeyResult(consumed=True, status="command_edit")

    def _dispatch_command(self, command: str, argument: str) -> str:
        session = self.session
        if command == "new":
            playlist = session.add_playlist(argument, select=True)
            return f"created {playlist.name}"
        if command == "rename":
            session.rename_active(argument)
            active = session.active
            return f"renamed to {active.name if active is not None else argument}"
        if command == "open":
            playlist = session.select_playlist(int(argument))
            return f"opened {playlist.name}"
        if command == "undo":
            return self._undo()
        if command == "redo":
            return self._redo()
        if command == "edit":
            values = [value.strip() for value in argument.split("|")]
            if len(values) != 4:
                raise ValueError("usage: edit title|artist|youtube|year")
            current = self._current_song_fields()
            fields = replace(
                current,
                title=values[0],
                artist=values[1],
                youtube_id=values[2],
                year=_parse_year(values[3]),
            )
            session.edit_song(self.cursor, fields)
            return f"edited {fields.title}"
        if command in _FIELD_COMMANDS:
            attr = _FIELD_COMMANDS[command]
            value = _parse_year(argument) if attr == "year" else argument
            fields = replace(self._current_song_fields(), **{attr: value})
            session.edit_song(self.cursor, fields)
            return f"{command} set"
        raise ValueError(f"unknown command '{command}'")

    def _current_song_fields(self) -> SongFields:
        playlist = self.session.active
        if playlist is None:
            raise NoActivePlaylistError("No playlist is selected")
        return playlist.song_at(self.cursor).fields()

    # -- key actions ---------------------------------------------------

    def _run(self, action: Callable[[], str]) -> KeyResult:
        try:
            message = action()
        except PlaylistIntegrityError as exc:
            return KeyResult(consumed=True, status="integrity_error", message=str(exc))
        except PlaylistUsageError as exc:
            return KeyResult(consumed=True, status="usage_error", message=str(exc))
        except ValueError as exc:
            return KeyResult(consumed=True, status="command_error", message=str(exc))
        return KeyResult(consumed=True, message=message)

    def _move_cursor(self, delta: int) -> str:
        size = len(self._last_snapshot.songs)
        if size:
            self.cursor = max(0, min(size - 1, self.cursor + delta))
        self._refresh()
        return ""

    def _move_song(self, delta: int) -> str:
        target = self.cursor + delta
        self.session.move_song(self.cursor, target)
        self.cursor = target
        self._refresh()
        return "moved"

    def _add_song(self) -> str:
        transaction = self.session.create_song()
        self.cursor = transaction.index
        self._refresh()
        return "song added"

    def _remove_song(self) -> str:
        transaction = self.session.remove_song(self.cursor)
        return f"removed {transaction.song.title}"

    def _undo(self) -> str:
        return f"undo {self.session.undo().describe()}"

    def _redo(self) -> str:
        return f"redo {self.session.redo().describe()}"

    def _new_playlist(self) -> str:
        playlist = self.session.add_playlist(select=True)
        self.cursor = 0
        self._refresh()
        return f"created {playlist.name}"

    def _cycle_playlist(self, delta: int) -> str:
        playlists = self.session.playlists
        if not playlists:
            return "no playlists"
        active = self.session.active
        if active is None:
            position = 0 if delta > 0 else len(playlists) - 1
        else:
            position = (playlists.index(active) + delta) % len(playlists)
        playlist = self.session.select_playlist(playlists[position].id)
        self.cursor = 0
        self._refresh()
        return f"opened {playlist.name}"

    def _close_playlist(self) -> str:
        self.session.close_playlist()
        self.cursor = 0
        return "closed"

    def _duplicate_playlist(self) -> str:
        active = self.session.active
        if active is None:
            return "no playlist selected"
        copy = self.session.duplicate_playlist(active.id)
        return f"duplicated as {copy.name}"

    def _delete_playlist(self) -> str:
        active = self.session.active
        if active is None:
            return "no playlist selected"
        self.session.delete_playlist(active.id)
        self.cursor = 0
        return f"deleted {active.name}"

    # -- session callbacks ---------------------------------------------

    def _on_render(self, snapshot: SessionSnapshot) -> None:
        self._last_snapshot = snapshot
        self._clamp_cursor()
        self.hooks.render(snapshot, self.cursor)

    def _on_session_event(self, name: str, payload: object | None) -> None:
        self._log("event ->", event=name, payload=payload)
        if name == "session.persist_failed":
            self.hooks.update_status(f"save failed: {payload}")

    def _refresh(self) -> None:
        self._last_snapshot = self.session.snapshot()
        self._clamp_cursor()
        self.hooks.render(self._last_snapshot, self.cursor)

    def _clamp_cursor(self) -> None:
        size = len(self._last_snapshot.songs)
        self.cursor = max(0, min(self.cursor, size - 1)) if size else 0

    def _log(self, prefix: str, **fields: object) -> None:
        parts = [prefix, f"active={self._last_snapshot.active_id!r}", f"cursor={self.cursor}"]
        parts.extend(f"{key}={value!r}" for key, value in fields.items() if value is not None)
        self.hooks.log(" ".join(parts))


__all__ = [
    "KeyResult",
    "TextualPlaylistAdapter",
    "TextualUIHooks",
    "format_library",
    "format_songs",
]
