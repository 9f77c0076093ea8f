"""
Tag context model

The single piece of mutable state threaded through a preprocessing run.
"""

from dataclasses import dataclass, field
from typing import Iterable, Set


@dataclass
class TagContext:
    """
    Set of currently defined tags plus the conditional nesting depth

    One TagContext is owned by one run and passed by reference into every
    recursive call of the interpreter. Tags are opaque, case-sensitive
    strings; the context only knows whether a tag is present.

    Attributes:
        tags: Names of the currently defined tags
        depth: Number of conditional blocks currently open (bookkeeping only,
               never consulted when evaluating conditions)

    Example:
        >>> ctx = TagContext.context_createFromTags(["linux"])
        >>> ctx.tag_define("debug")
        >>> "debug" in ctx
        True
    """
    tags: Set[str] = field(default_factory=set)
    depth: int = 0

    @classmethod
    def context_createFromTags(cls, tags: Iterable[str]) -> "TagContext":
        """Seed a fresh context from the predefined tags"""
        return cls(tags=set(tags))

    def tag_define(self, tag: str) -> None:
        self.tags.add(tag)

    def tag_undefine(self, tag: str) -> None:
        # Undefining an absent tag is not an error
        self.tags.discard(tag)

    def tag_isDefined(self, tag: str) -> bool:
        return tag in self.tags

    def __contains__(self, tag: str) -> bool:
        return self.tag_isDefined(tag)
