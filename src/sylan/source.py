"""Character stream over a byte source with arbitrary lookahead and position tracking."""

from __future__ import annotations

from collections import deque
from itertools import islice
from typing import BinaryIO

from sylan.errors import SourceReadError
from sylan.tokens import Position


class SourceStream:
    """Wrap a binary file-like object as a stream of characters.

    Each byte is promoted to one character, so only ASCII-range text is read
    faithfully. Characters peeked with :meth:`look_ahead` are buffered and
    handed out again by :meth:`read`. Both return None when the source runs
    out before the requested count is reached.
    """

    def __init__(self, source: BinaryIO) -> None:
        self._source = source
        self._buffer: deque[str] = deque()
        self._exhausted = False
        self._position = Position.start()

    @property
    def position(self) -> Position:
        return self._position

    def is_empty(self) -> bool:
        """True once the source is known to be exhausted and nothing is buffered."""
        return self._exhausted and not self._buffer

    def read(self, n: int = 1) -> str | None:
        """Consume up to *n* characters; None if the source ends first.

        Characters consumed before the source ran out stay consumed.
        """
        if n <= 0:
            return ""
        chars: list[str] = []
        while len(chars) < n:
            if self._buffer:
                ch = self._buffer.popleft()
            else:
                ch = self._pull()
                if ch is None:
                    return None
            self._position = self._position.update(ch)
            chars.append(ch)
        return "".join(chars)

    def look_ahead(self, n: int = 1) -> str | None:
        """Return the next *n* characters without consuming them; None if fewer remain."""
        if n <= 0:
            return ""
        while len(self._buffer) < n:
            ch = self._pull()
            if ch is None:
                return None
            self._buffer.append(ch)
        return "".join(islice(self._buffer, n))

    def _pull(self) -> str | None:
        if self._exhausted:
            return None
        try:
            data = self._source.read(1)
        except (OSError, ValueError) as exc:
            raise SourceReadError(self._position) from exc
        if not data:
            self._exhausted = True
            return None
        return chr(data[0])
