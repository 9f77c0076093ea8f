"""
Directive scanner

Reads the keyword that follows a directive marker and classifies it, and
reads the tag argument of define/undef directives.

Both readers share the same whitespace rules: leading whitespace on the line
is skipped, the word ends at the first whitespace after it (which is
consumed), and a newline or stream end always terminates the read.
"""

from typing import Optional, Tuple

from ..config import appsettings
from ..models.directives import ScannedDirective, operation_classify
from .stream import CharStream


def word_read(stream: CharStream, capacity: int = 0) -> Tuple[str, bool]:
    """
    Read one whitespace-delimited word from the current line

    Args:
        stream: Input stream positioned anywhere on a line
        capacity: Maximum number of characters kept; extra characters are
                  read and dropped. 0 means unbounded.

    Returns:
        (word, line_ended) where line_ended is True if a newline was consumed
        or the stream ran out before the word was terminated by whitespace.

    Example:
        For remaining input "  DEBUG rest\\n" returns ("DEBUG", False) and
        leaves "rest\\n" on the stream.
    """
    chars = []
    started = False
    for c in stream:
        if c == '\n':
            return ''.join(chars), True
        if not c.isspace():
            if not capacity or len(chars) < capacity:
                chars.append(c)
            started = True
        elif started:
            return ''.join(chars), False
    return ''.join(chars), True


def operation_extract(stream: CharStream, capacity: Optional[int] = None) -> ScannedDirective:
    """
    Scan and classify the directive word after a directive marker

    The keyword buffer is bounded (16 characters by default): longer words
    are truncated without error, so "#endifendifendifendif" is UNKNOWN and
    echoes as its first 16 characters.

    Args:
        stream: Input stream positioned right after the marker
        capacity: Keyword buffer size, defaults to appsettings.keyword_capacity

    Returns:
        ScannedDirective describing the word. Argument text (an if condition,
        a define tag) is left on the stream for the caller.
    """
    if capacity is None:
        capacity = appsettings.keyword_capacity
    line_number = stream.line_number
    word, line_ended = word_read(stream, capacity)
    return ScannedDirective(
        operation=operation_classify(word),
        word=word,
        line_ended=line_ended,
        line_number=line_number,
    )


def tag_read(stream: CharStream, directive: ScannedDirective) -> str:
    """
    Read the tag argument of a define/undef directive

    Returns an empty string when the directive word already ended the line;
    text after the tag on the same line is left on the stream.
    """
    if directive.line_ended:
        return ''
    tag, _ = word_read(stream)
    return tag
