"""Executable Textual app hosting the playlist editor."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use playlister.adapters.textual.app"
    ) from exc

from playlister.playlist import PlaylistIntegrityError, PlaylistStoreError
from playlister.runtime import Settings, telemetry
from playlister.session import EditingSession, SessionSnapshot
from playlister.storage import JsonPlaylistStore, load_default_playlists

from .controller import (
    TextualPlaylistAdapter,
    TextualUIHooks,
    format_library,
    format_songs,
)


def create_session(data_file: Path) -> EditingSession:
    """Build a session persisting to ``data_file``."""

    return EditingSession(store=JsonPlaylistStore(data_file))


def load_library(session: EditingSession, *, use_defaults: bool = True) -> str:
    """Load the saved library, falling back when the store is unusable.

    Returns the status line to show. An unreadable JSON library is moved
    aside so the next save does not overwrite it.
    """

    try:
        restored = session.load(use_defaults=use_defaults)
    except (PlaylistStoreError, PlaylistIntegrityError) as exc:
        telemetry.log_failure("ui.load", exc, logger_name="playlister.ui")
        note = ""
        if isinstance(session.store, JsonPlaylistStore):
            try:
                moved = session.store.set_aside()
            except PlaylistStoreError as move_exc:
                telemetry.log_failure("ui.set_aside", move_exc, logger_name="playlister.ui")
            else:
                note = f" (kept as {moved})" if moved else ""
        session.reset(load_default_playlists() if use_defaults else [])
        source = "defaults" if use_defaults else "an empty library"
        return f"Could not load playlists{note}: {exc}. Started from {source}"
    source = str(getattr(session.store, "path", "store")) if restored else "defaults"
    return f"Loaded {len(session.playlists)} playlists from {source}"


@dataclass
class UIState:
    library_text: str = ""
    songs_text: str = ""
    status_text: str = ""
    command_text: str = ""


class PlaylisterApp(App[None]):
    """Two-pane playlist editor: library on the left, songs on the right."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#panes {
		height: 1fr;
	}

	#library-view {
		width: 32;
		border: round $accent;
		padding: 0 1;
	}

	#songs-view {
		width: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#command-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, data_file: Path, use_defaults: bool = True) -> None:
        super().__init__()
        self._state = UIState()
        self._data_file = data_file
        self._use_defaults = use_defaults
        self.session: EditingSession | None = None
        self.adapter: TextualPlaylistAdapter | None = None
        self._library_widget: Static | None = None
        self._songs_widget: Static | None = None
        self._status_widget: Static | None = None
        self._command_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="panes"):
            self._library_widget = Static("", id="library-view")
            self._songs_widget = Static("", id="songs-view")
            yield self._library_widget
            yield self._songs_widget
        self._status_widget = Static("", id="status-line")
        self._command_widget = Static("", id="command-line")
        yield self._status_widget
        yield self._command_widget
        yield Footer()

    async def on_mount(self) -> None:
        self.session = create_session(self._data_file)
        hooks = TextualUIHooks(
            render=self._render,
            update_status=self._update_status,
            show_command=self._show_command,
            log=self._log_line,
        )
        self.adapter = TextualPlaylistAdapter(self.session, hooks)
        self._update_status(load_library(self.session, use_defaults=self._use_defaults))

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _render(self, snapshot: SessionSnapshot, cursor: int) -> None:
        self._state.library_text = "\n".join(format_library(snapshot))
        if snapshot.has_active:
            self._state.songs_text = "\n".join(format_songs(snapshot, cursor))
        else:
            self._state.songs_text = "No playlist selected. Use [ and ] to open one."
        if self._library_widget:
            self._library_widget.update(self._state.library_text)
        if self._songs_widget:
            self._songs_widget.update(self._state.songs_text)
        undo = "undo" if snapshot.can_undo else "-"
        redo = "redo" if snapshot.can_redo else "-"
        self.sub_title = f"{snapshot.active_name or ''}  [{undo}/{redo}]"

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_command(self, command: Optional[str]) -> None:
        self._state.command_text = command or ""
        if self._command_widget:
            self._command_widget.update("" if command is None else f":{command}")

    def _log_line(self, line: str) -> None:
        telemetry.record_event(
            "ui.log", level="debug", data={"line": line}, logger_name="playlister.ui"
        )

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        key = event.key
        if key in {"ctrl+c", "ctrl+q"}:
            return None
        if key.startswith("ctrl+"):
            return (key.split("+", 1)[1], None, ("CTRL",))
        if key == "escape":
            return ("ESC", None, ())
        if key in {"enter", "return"}:
            return ("ENTER", None, ())
        if key in {"backspace", "delete", "up", "down"}:
            return (key.upper(), None, ())
        if event.character:
            return (event.character, event.character, ())
        return (key.upper(), None, ())


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description="Edit playlists in the terminal.")
    parser.add_argument(
        "--data-file",
        type=Path,
        default=settings.data_file,
        help="JSON file holding the playlist library",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=settings.log_preset or "headless",
        help="telelog preset (default: headless, which logs to a file)",
    )
    parser.add_argument(
        "--no-defaults",
        action="store_true",
        default=not settings.use_defaults,
        help="Start with an empty library instead of the bundled playlists",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    app = PlaylisterApp(
        data_file=Path(args.data_file).expanduser(),
        use_defaults=not args.no_defaults,
    )
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
