"""
Condition evaluator

Recursive descent parser that evaluates a lexed condition directly against
a TagContext; no syntax tree is built.

Grammar:
    primary := '(' binary ')' | TAG
    unary   := '!' unary | primary
    binary  := unary ( EOS | ')' | '&&' binary | '||' binary | '^' binary )

There is no operator precedence. After an operator the *whole* remaining
expression is parsed as the right operand, so evaluation folds to the right:

    a && b || c    ==    a && (b || c)
    a || b && c    ==    a || (b && c)
    a ^ b && c     ==    a ^ (b && c)

Use parentheses to group differently.
"""

from ..models.context import TagContext
from ..models.errors import ConditionError
from ..models.expression import TokenType, BINARY_OPERATORS
from .lexer import ExpressionLexer
from .log import LOG


class ConditionEvaluator:
    """
    Evaluate one lexed condition against a tag context

    Example:
        >>> lexer = ExpressionLexer(CharStream(io.StringIO("a && !b\\n")))
        >>> ConditionEvaluator(lexer, TagContext({"a"})).evaluate()
        True
    """

    def __init__(self, lexer: ExpressionLexer, context: TagContext):
        self.lexer = lexer
        self.context = context

    def evaluate(self) -> bool:
        """
        Evaluate the full condition

        Raises:
            ConditionError: If the condition is empty, malformed, has
                            unbalanced parentheses, or nests deeper than
                            the interpreter stack allows
        """
        if self.lexer.current().type is TokenType.EOS:
            self.error("Expected condition but got nothing")
        try:
            result = self.binary_evaluate()
        except RecursionError:
            self.error("Condition nested too deeply")
        if self.lexer.current().type is not TokenType.EOS:
            self.error(f"Unexpected '{self.lexer.current()}' after condition")
        LOG(f"Condition on line {self.lexer.line_number} -> {result}", level=3)
        return result

    def binary_evaluate(self) -> bool:
        left = self.unary_evaluate()
        token = self.lexer.current()

        if token.type in (TokenType.EOS, TokenType.PAREN_CLOSE):
            # ')' is left for the enclosing primary to match
            return left

        if token.type in BINARY_OPERATORS:
            self.lexer.advance()
            # Parse the right operand before combining so the token stream
            # is always consumed in full
            right = self.binary_evaluate()
            return BINARY_OPERATORS[token.type](left, right)

        self.error(f"Expected operator but got '{token}'")

    def unary_evaluate(self) -> bool:
        if self.lexer.current().type is TokenType.NOT:
            self.lexer.advance()
            return not self.unary_evaluate()
        return self.primary_evaluate()

    def primary_evaluate(self) -> bool:
        if self.lexer.current().type is TokenType.PAREN_OPEN:
            self.lexer.advance()
            value = self.binary_evaluate()
            self.lexer.expect(TokenType.PAREN_CLOSE)
            return value

        token = self.lexer.expect(TokenType.TAG)
        return self.context.tag_isDefined(token.tag)

    def error(self, message: str) -> None:
        """
        Report a condition error

        Raises:
            ConditionError: Always
        """
        raise ConditionError(message, self.lexer.line_number)


def condition_evaluate(lexer: ExpressionLexer, context: TagContext) -> bool:
    """Evaluate an already lexed condition line"""
    return ConditionEvaluator(lexer, context).evaluate()
