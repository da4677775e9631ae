"""Sequential line reading with one line of lookahead."""

from __future__ import annotations

from typing import TextIO

from .constants import DEFAULT_MAX_LINE_LENGTH
from .exceptions import LineTooLongError
from .models import Line


class LineSource:
    """Read trimmed lines from a text stream, one line ahead of the caller.

    The line returned by `next_line` is always the one read on the previous
    call, so the classifier can look at the following line through `peek`
    before deciding what to do with the current one. At end of input the last
    buffered line is still delivered once, then `exhausted` becomes True.

    Args:
        stream: Text stream to read from.
        max_line_length: Longest accepted physical line, in characters and
            without the line ending.

    Raises:
        LineTooLongError: From `next_line`, when a line exceeds the limit.

    Examples:
        source = LineSource(io.StringIO("<a>\\n</a>\\n"))
        line, is_final = source.next_line()
    """

    def __init__(self, stream: TextIO, max_line_length: int = DEFAULT_MAX_LINE_LENGTH):
        self._stream = stream
        self._max_line_length = max_line_length
        self._number = -1
        self._next: Line | None = None
        self._at_end = False
        self.exhausted = False
        self._next = self._read()

    def _read(self) -> Line | None:
        raw = self._stream.readline()
        if raw == "":
            self._at_end = True
            return None

        self._number += 1
        text = raw.rstrip("\r\n")
        if len(text) > self._max_line_length:
            raise LineTooLongError(self._number + 1, self._max_line_length)
        return Line(text=text.strip(), number=self._number)

    def next_line(self) -> tuple[Line | None, bool]:
        """Advance by one line.

        Returns:
            tuple[Line | None, bool]: The current line (None once the input is
                exhausted) and whether it is the last line of the input.
        """
        current = self._next
        if current is None:
            self.exhausted = True
            return None, True

        self._next = None if self._at_end else self._read()
        return current, self._next is None

    def peek(self) -> Line | None:
        """Return the line after the current one without consuming it."""
        return self._next

    def __iter__(self):
        while True:
            line, _ = self.next_line()
            if line is None:
                return
            yield line
