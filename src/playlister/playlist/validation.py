"""Index validation helpers shared by playlist mutators."""

from __future__ import annotations

from typing import Sized

from .errors import PlaylistIndexError


def ensure_index(songs: Sized, index: int, *, allow_end: bool = False) -> int:
    """Return ``index`` if it addresses ``songs``, else raise.

    ``allow_end`` widens the valid range to ``[0, len]`` for insertions.
    """

    size = len(songs)
    upper = size if allow_end else size - 1
    if isinstance(index, bool) or not isinstance(index, int):
        raise PlaylistIndexError(
            f"Song index must be an int, got {index!r}", index=index, size=size
        )
    if index < 0 or index > upper:
        raise PlaylistIndexError(
            f"Song index {index} out of range for playlist of {size}",
            index=index,
            size=size,
        )
    return index
