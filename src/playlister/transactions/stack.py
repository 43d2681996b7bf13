"""Undo/redo history for song transactions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from playlister.playlist import (
    NothingToRedoError,
    NothingToUndoError,
    PlaylistIntegrityError,
    PlaylistUsageError,
    SongFields,
)
from playlister.runtime import telemetry

from .songs import SongTransaction

Fingerprint = Tuple[SongFields, ...]


@dataclass(slots=True)
class HistoryFrame:
    transaction: SongTransaction
    before: Optional[Fingerprint]
    after: Optional[Fingerprint]


class TransactionStack:
    """Linear done/undone history.

    Submitting a new transaction discards everything waiting to be redone;
    there are no branching timelines. With ``verify`` enabled every undo and
    redo is checked against the playlist state recorded when the transaction
    was first applied, and a mismatch raises :class:`PlaylistIntegrityError`.
    """

    def __init__(self, *, verify: bool = True, logger_name: str | None = None) -> None:
        self._done: List[HistoryFrame] = []
        self._undone: List[HistoryFrame] = []
        self._verify = verify
        self._logger_name = logger_name

    @property
    def done(self) -> Tuple[SongTransaction, ...]:
        return tuple(frame.transaction for frame in self._done)

    @property
    def undone(self) -> Tuple[SongTransaction, ...]:
        return tuple(frame.transaction for frame in self._undone)

    def can_undo(self) -> bool:
        return bool(self._done)

    def can_redo(self) -> bool:
        return bool(self._undone)

    def peek_undo(self) -> Optional[SongTransaction]:
        return self._done[-1].transaction if self._done else None

    def peek_redo(self) -> Optional[SongTransaction]:
        return self._undone[-1].transaction if self._undone else None

    def submit(self, transaction: SongTransaction) -> None:
        with self._span("submit", transaction):
            before = self._fingerprint(transaction)
            transaction.apply()
            frame = HistoryFrame(transaction, before, self._fingerprint(transaction))
            self._done.append(frame)
            dropped = len(self._undone)
            self._undone.clear()
        self._record("submit", transaction, dropped_redo=dropped)

    def undo(self) -> SongTransaction:
        if not self._done:
            raise NothingToUndoError("Nothing to undo")
        frame = self._done.pop()
        with self._span("undo", frame.transaction):
            self._replay(frame, undo=True)
        self._undone.append(frame)
        self._record("undo", frame.transaction)
        return frame.transaction

    def redo(self) -> SongTransaction:
        if not self._undone:
            raise NothingToRedoError("Nothing to redo")
        frame = self._undone.pop()
        with self._span("redo", frame.transaction):
            self._replay(frame, undo=False)
        self._done.append(frame)
        self._record("redo", frame.transaction)
        return frame.transaction

    def clear(self) -> None:
        self._done.clear()
        self._undone.clear()

    def _replay(self, frame: HistoryFrame, *, undo: bool) -> None:
        transaction = frame.transaction
        try:
            if undo:
                transaction.invert()
            else:
                transaction.apply()
        except PlaylistUsageError as exc:
            # Replaying recorded history must never hit a usage error.
            self.clear()
            raise PlaylistIntegrityError(
                f"Could not {'undo' if undo else 'redo'} {transaction.label}: {exc}",
                playlist_id=transaction.playlist.id,
            ) from exc

        expected = frame.before if undo else frame.after
        if expected is not None and self._fingerprint(transaction) != expected:
            self.clear()
            raise PlaylistIntegrityError(
                f"{transaction.label} did not restore playlist state",
                playlist_id=transaction.playlist.id,
            )

    def _fingerprint(self, transaction: SongTransaction) -> Optional[Fingerprint]:
        if not self._verify:
            return None
        return transaction.playlist.fingerprint()

    def _span(self, action: str, transaction: SongTransaction):
        return telemetry.span(
            f"transactions::{action}",
            logger_name=self._logger_name,
            component="transactions",
            metadata={
                "transaction": transaction.label,
                "playlist": transaction.playlist.id,
            },
        )

    def _record(self, action: str, transaction: SongTransaction, **extra: object) -> None:
        telemetry.record_event(
            f"transactions.{action}",
            level="debug",
            data={
                "transaction": transaction.describe(),
                "done": len(self._done),
                "undone": len(self._undone),
                **extra,
            },
            logger_name=self._logger_name,
        )


__all__ = ["TransactionStack", "HistoryFrame", "Fingerprint"]
