"""
stpp - Simple tag preprocessor

Streams text through #if/#elif/#else/#endif blocks whose guards are boolean
expressions over a set of tags, with #define/#undef to change the set.
"""

__version__ = "1.0.0"

from .lib import Preprocessor, preprocess, preprocess_text, LOG, state_connectToLogger
from .models import TagContext, PreprocessError, ConditionError, DirectiveError

__all__ = [
    "Preprocessor",
    "preprocess",
    "preprocess_text",
    "TagContext",
    "PreprocessError",
    "ConditionError",
    "DirectiveError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
