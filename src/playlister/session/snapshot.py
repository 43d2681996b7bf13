"""Read-only views of session state handed to collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from playlister.playlist import SongFields


@dataclass(frozen=True, slots=True)
class PlaylistSummary:
    id: int
    name: str
    size: int


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Everything a renderer needs after a state change."""

    active_id: Optional[int]
    active_name: Optional[str]
    can_undo: bool
    can_redo: bool
    songs: Tuple[SongFields, ...]
    playlists: Tuple[PlaylistSummary, ...]
    last_action: Optional[str] = None

    @property
    def has_active(self) -> bool:
        return self.active_id is not None


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class SessionHooks:
    """Callbacks the session fires after each state change.

    Both default to no-ops so the session can run headless.
    """

    render: Callable[[SessionSnapshot], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop


__all__ = ["PlaylistSummary", "SessionSnapshot", "SessionHooks"]
