"""Song transactions and the undo/redo stack."""

from .songs import (
    TRANSACTION_TYPES,
    CreateSong,
    EditSong,
    MoveSong,
    RemoveSong,
    SongTransaction,
)
from .stack import HistoryFrame, TransactionStack

__all__ = [
    "SongTransaction",
    "CreateSong",
    "RemoveSong",
    "MoveSong",
    "EditSong",
    "TRANSACTION_TYPES",
    "TransactionStack",
    "HistoryFrame",
]
