"""
Directive operation models

Defines the closed set of directive keywords recognized by the scanner and
the structure returned for every scanned directive.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Dict


class Operation(Enum):
    """
    Directive operations

    UNKNOWN is a catch-all for any word that is not a recognized keyword.
    It is not an error: the word is echoed back as literal text.
    """
    IF = "if"
    ELIF = "elif"
    ELSE = "else"
    ENDIF = "endif"
    DEFINE = "define"
    UNDEF = "undef"
    UNKNOWN = "unknown"


# Keyword -> operation, matched case-sensitively
KEYWORDS: Dict[str, Operation] = {
    'if': Operation.IF,
    'elif': Operation.ELIF,
    'else': Operation.ELSE,
    'endif': Operation.ENDIF,
    'define': Operation.DEFINE,
    'undef': Operation.UNDEF,
}

# Operations that close the body of the enclosing conditional block
BRANCH_OPERATIONS = frozenset({Operation.ELIF, Operation.ELSE, Operation.ENDIF})


@dataclass
class ScannedDirective:
    """
    Result of reading a directive word after the directive marker

    Attributes:
        operation: Classified directive operation
        word: Raw collected word (possibly truncated), echoed for UNKNOWN
        line_ended: True if scanning the word already consumed the line
                    terminator or hit stream end, so no argument text follows
        line_number: Source line on which the directive started

    Example:
        For source "#define DEBUG\\n" the scanner returns
        ScannedDirective(operation=Operation.DEFINE, word="define",
                         line_ended=False, line_number=1)
        and leaves "DEBUG\\n" on the stream.
    """
    operation: Operation
    word: str
    line_ended: bool
    line_number: int


def operation_classify(word: str) -> Operation:
    """Map a directive word to its operation (UNKNOWN if not a keyword)"""
    return KEYWORDS.get(word, Operation.UNKNOWN)
