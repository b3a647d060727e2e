"""Incremental splitting of raw subprocess output into text lines."""

from __future__ import annotations

import re
from collections.abc import Callable

_CR = 0x0D
_LF = 0x0A
_TERMINATOR = re.compile(rb"[\r\n]")


class LineSplitter:
    """Interpret a byte stream as lines and pass each one to a sink.

    Supports LF, CR LF and CR line endings, including a CR LF pair split
    across two writes. Bytes are decoded only once a whole line has been
    assembled, so multi-byte characters may straddle write boundaries.
    """

    def __init__(self, sink: Callable[[str], None], *, encoding: str = "utf-8") -> None:
        self._sink = sink
        self._encoding = encoding
        self._pending = bytearray()
        self._last_was_cr = False

    def write(
        self,
        data: bytes | bytearray | memoryview,
        offset: int = 0,
        length: int | None = None,
    ) -> None:
        """Emit every line completed by ``data[offset:offset + length]``."""

        size = len(data)
        if length is None:
            length = size - offset
        end = offset + length
        if length < 0 or offset < 0 or offset > size or end > size:
            raise IndexError(
                f"Invalid write range: offset={offset} length={length} size={size}",
            )
        if length == 0:
            return

        chunk = bytes(data[offset:end])
        start = 0
        for match in _TERMINATOR.finditer(chunk):
            index = match.start()
            if index != start:
                self._last_was_cr = False
            line_start = start
            start = index + 1
            # CR state is recorded before the sink is called.
            if chunk[index] == _LF:
                swallowed = self._last_was_cr
                self._last_was_cr = False
                if not swallowed:
                    self._emit(chunk, line_start, index)
            else:
                self._last_was_cr = True
                self._emit(chunk, line_start, index)

        if start < len(chunk):
            self._last_was_cr = False
            self._pending.extend(chunk[start:])

    def close(self) -> None:
        if not self._pending:
            return
        line = bytes(self._pending)
        self._pending.clear()
        self._sink(line.decode(self._encoding, errors="replace"))

    def __enter__(self) -> LineSplitter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _emit(self, chunk: bytes, start: int, end: int) -> None:
        if self._pending:
            self._pending.extend(chunk[start:end])
            line = bytes(self._pending)
            self._pending.clear()
        else:
            line = chunk[start:end]
        self._sink(line.decode(self._encoding, errors="replace"))
