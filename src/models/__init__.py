"""
Models package for stpp

Contains data structures and type definitions for the preprocessing pipeline.
"""

from .state import ProgramState, pipeline
from .context import TagContext
from .directives import Operation, ScannedDirective, KEYWORDS, BRANCH_OPERATIONS
from .expression import Token, TokenType
from .errors import PreprocessError, ConditionError, DirectiveError

__all__ = [
    "ProgramState",
    "pipeline",
    "TagContext",
    "Operation",
    "ScannedDirective",
    "KEYWORDS",
    "BRANCH_OPERATIONS",
    "Token",
    "TokenType",
    "PreprocessError",
    "ConditionError",
    "DirectiveError",
]
