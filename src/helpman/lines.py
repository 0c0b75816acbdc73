"""Line source with one line of lookahead.

Both parsers read their input through a LineCursor so they accept either
an in-memory string or any iterable of lines (an open file, a list).
Line terminators are removed the way a line scanner does: one trailing
``\\n`` and any ``\\r`` before it.  Read errors from the underlying
stream propagate unchanged.
"""

import io
from typing import Iterable, Optional, Union


class LineCursor:
    """Iterate lines with ``peek()`` and a running 1-based ``lineno``."""

    def __init__(self, source: Union[str, Iterable[str]]):
        if isinstance(source, str):
            source = io.StringIO(source)
        self._lines = iter(source)
        self._pending: Optional[str] = None
        self._exhausted = False
        self.lineno = 0

    def _read(self) -> Optional[str]:
        if self._exhausted:
            return None
        try:
            line = next(self._lines)
        except StopIteration:
            self._exhausted = True
            return None
        if line.endswith("\n"):
            line = line[:-1]
        return line.rstrip("\r")

    def peek(self) -> Optional[str]:
        """The next line without consuming it, None at end of input."""
        if self._pending is None:
            self._pending = self._read()
        return self._pending

    def next_line(self) -> Optional[str]:
        """Consume and return the next line, None at end of input."""
        line = self.peek()
        self._pending = None
        if line is not None:
            self.lineno += 1
        return line

    def __iter__(self):
        return self

    def __next__(self) -> str:
        line = self.next_line()
        if line is None:
            raise StopIteration
        return line
