"""
Condition expression lexer

Tokenizes the remainder of one directive line (an if/elif guard) into a flat
token list.

Token rules:
- Whitespace separates tokens and is never emitted
- '!' NOT, '^' XOR, '(' and ')' parentheses
- '&&' AND, '||' OR; a lone '&' or '|' is accepted with a warning
- Any other character is part of a tag name
"""

from typing import List, Optional

from ..config import appsettings
from ..models.errors import ConditionError
from ..models.expression import Token, TokenType, EOS_TOKEN
from .stream import CharStream
from .log import LOG


SINGLE_CHAR_TOKENS = {
    '!': TokenType.NOT,
    '^': TokenType.XOR,
    '(': TokenType.PAREN_OPEN,
    ')': TokenType.PAREN_CLOSE,
}

DOUBLE_CHAR_TOKENS = {
    '&': (TokenType.AND, "And operator is && not &"),
    '|': (TokenType.OR, "Or operator is || not |"),
}


class ExpressionLexer:
    """
    Lexer for one line of condition text

    The whole line is tokenized on construction. Afterwards the lexer acts as
    a cursor over the tokens: current() peeks, advance() steps, expect()
    steps after checking the token type. Reading past the last token yields
    the EOS token.

    Attributes:
        tokens: Lexed tokens, without the EOS sentinel
        position: Index of the current token
        warnings: Malformed-operator warnings raised while lexing
        line_number: Source line the condition was read from

    Example:
        For remaining input "linux && !debug\\n":
        tokens == [Token(TAG, "linux"), Token(AND), Token(NOT), Token(TAG, "debug")]
    """

    def __init__(self, stream: CharStream, strict: Optional[bool] = None):
        self.stream = stream
        self.strict = appsettings.strict_mode if strict is None else strict
        self.line_number = stream.line_number
        self.tokens: List[Token] = []
        self.position = 0
        self.warnings: List[str] = []
        self.line_tokenize()

    def line_tokenize(self) -> None:
        """Consume characters up to and including the end of the line"""
        tag: List[str] = []

        def tag_flush() -> None:
            if tag:
                self.tokens.append(Token(TokenType.TAG, ''.join(tag)))
                tag.clear()

        for c in self.stream:
            if c == '\n':
                break
            if c.isspace():
                tag_flush()
            elif c in SINGLE_CHAR_TOKENS:
                tag_flush()
                self.tokens.append(Token(SINGLE_CHAR_TOKENS[c]))
            elif c in DOUBLE_CHAR_TOKENS:
                tag_flush()
                self.operator_read(c)
            else:
                tag.append(c)

        tag_flush()

    def operator_read(self, first: str) -> None:
        """
        Read the second half of a '&&' or '||' operator

        A lone '&' or '|' still produces the operator; the character that
        followed it is pushed back so it is lexed normally.
        """
        token_type, message = DOUBLE_CHAR_TOKENS[first]
        second = self.stream.get()
        if second != first:
            if self.strict:
                raise ConditionError(message, self.line_number)
            self.warnings.append(message)
            LOG(f"Warning: {message} (line {self.line_number})", level=1)
            self.stream.unget(second)
        self.tokens.append(Token(token_type))

    def current(self) -> Token:
        if self.position >= len(self.tokens):
            return EOS_TOKEN
        return self.tokens[self.position]

    def advance(self) -> Token:
        """Step past the current token and return it"""
        token = self.current()
        self.position += 1
        return token

    def expect(self, token_type: TokenType) -> Token:
        """
        Step past the current token, which must be of the given type

        Raises:
            ConditionError: If the current token has a different type
        """
        token = self.current()
        if token.type is not token_type:
            raise ConditionError(
                f"Expected '{token_type.value}' but got '{token}'", self.line_number
            )
        self.position += 1
        return token
