"""
Piece Table

Tracks how a derived text stream was assembled from a raw text, one
piece per emitted segment, so offsets in the stream can be mapped back to
offsets in the raw text.
"""

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass(frozen=True)
class Piece:
    """A stream segment [stream_start, stream_end) taken from raw [raw_start, raw_end)."""
    stream_start: int
    stream_end: int
    raw_start: int
    raw_end: int


class PieceTable:
    """
    Ordered pieces of a derived stream.

    Usage:
        table = PieceTable()
        table.emit("VERB", 4, 9)   # "VERB" replaces raw text [4, 9)
        table.emit(" ", 9, 10)
        table.stream               # "VERB "
        table.to_raw(0, 4)         # (4, 9)
    """

    def __init__(self):
        self._parts: list[str] = []
        self._pieces: list[Piece] = []
        self._stream_starts: list[int] = []
        self._stream_ends: list[int] = []
        self._length = 0

    def __len__(self) -> int:
        return len(self._pieces)

    def __iter__(self) -> Iterator[Piece]:
        return iter(self._pieces)

    @property
    def stream(self) -> str:
        return "".join(self._parts)

    def emit(self, segment: str, raw_start: int, raw_end: int) -> Piece:
        """Append a segment to the stream, recording its raw source range."""
        piece = Piece(self._length, self._length + len(segment), raw_start, raw_end)
        self._parts.append(segment)
        self._pieces.append(piece)
        self._stream_starts.append(piece.stream_start)
        self._stream_ends.append(piece.stream_end)
        self._length = piece.stream_end
        return piece

    def to_raw(self, stream_start: int, stream_end: int) -> Optional[tuple[int, int]]:
        """
        Raw range covered by the pieces overlapping [stream_start, stream_end).

        Returns the min raw start and max raw end over those pieces, or None
        when no piece overlaps.
        """
        first = bisect_right(self._stream_ends, stream_start)
        last = bisect_left(self._stream_starts, stream_end) - 1
        if first >= len(self._pieces) or last < first:
            return None

        overlapping = self._pieces[first:last + 1]
        return (
            min(p.raw_start for p in overlapping),
            max(p.raw_end for p in overlapping),
        )
