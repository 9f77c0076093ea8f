"""
Condition expression token models
"""

from enum import Enum
from dataclasses import dataclass


class TokenType(Enum):
    """Token kinds produced by the expression lexer"""
    TAG = "Tag"
    PAREN_OPEN = "("
    PAREN_CLOSE = ")"
    AND = "&&"
    OR = "||"
    XOR = "^"
    NOT = "!"
    EOS = "EOS"


@dataclass(frozen=True)
class Token:
    """
    A single lexed token

    Attributes:
        type: Token kind
        tag: Tag name for TAG tokens, empty otherwise
    """
    type: TokenType
    tag: str = ""

    def __str__(self) -> str:
        return self.type.value


# Sentinel returned once the lexer runs past its last token
EOS_TOKEN = Token(TokenType.EOS)

# Binary operator token -> boolean combinator
BINARY_OPERATORS = {
    TokenType.AND: lambda a, b: a and b,
    TokenType.OR: lambda a, b: a or b,
    TokenType.XOR: lambda a, b: a != b,
}
