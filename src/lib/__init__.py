"""
stpp - Simple tag preprocessor

Conditional text inclusion driven by a mutable set of tags.
"""

__version__ = "1.0.0"

from .preprocessor import Preprocessor, preprocess, preprocess_text
from .lexer import ExpressionLexer
from .evaluator import ConditionEvaluator
from .log import LOG, state_connectToLogger

__all__ = [
    "Preprocessor",
    "preprocess",
    "preprocess_text",
    "ExpressionLexer",
    "ConditionEvaluator",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
