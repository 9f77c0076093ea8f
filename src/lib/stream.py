"""
Character stream with single-character push-back

Wraps any readable text stream so the scanner, lexer and interpreter can
consume input one character at a time, detect end-of-stream, and return one
character to the stream when they read too far.
"""

from typing import Optional, TextIO


class CharStream:
    """
    Character-at-a-time reader over a text stream

    Attributes:
        line_number: Line of the next character to be read (1-based)

    Example:
        >>> import io
        >>> stream = CharStream(io.StringIO("ab"))
        >>> stream.get(), stream.get(), stream.get()
        ('a', 'b', '')
    """

    def __init__(self, source: TextIO):
        self.source = source
        self.line_number = 1
        self._pushback: Optional[str] = None

    def get(self) -> str:
        """Read the next character, or '' at end of stream"""
        if self._pushback is not None:
            c, self._pushback = self._pushback, None
        else:
            c = self.source.read(1)
        if c == '\n':
            self.line_number += 1
        return c

    def unget(self, c: str) -> None:
        """
        Push one character back onto the stream

        Pushing back the empty end-of-stream marker is a no-op, so callers
        can return whatever get() gave them.
        """
        if not c:
            return
        if self._pushback is not None:
            raise RuntimeError("CharStream supports a single character of push-back")
        if c == '\n':
            self.line_number -= 1
        self._pushback = c

    def __iter__(self):
        while True:
            c = self.get()
            if not c:
                return
            yield c
