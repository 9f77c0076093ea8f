"""
Preprocessor error taxonomy

Every error raised here is fatal: it unwinds the whole run.
"""

from typing import Optional


class PreprocessError(SyntaxError):
    """
    Base class for fatal preprocessing errors

    Attributes:
        message: Human-readable description without location
        line_number: Source line where the error was detected, if known
    """

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.message = message
        self.line_number = line_number
        if line_number is not None:
            super().__init__(f"{message} (line {line_number})")
        else:
            super().__init__(message)


class ConditionError(PreprocessError):
    """Malformed, empty, or unbalanced condition expression"""


class DirectiveError(PreprocessError):
    """Structurally invalid directive (missing tag, unterminated block, ...)"""
