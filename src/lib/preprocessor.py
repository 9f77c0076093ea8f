"""
Conditional block interpreter

Streams literal text from input to output, interpreting directives as they
are met. A directive is the marker character (# by default) followed by a
keyword:

    #if COND          open a conditional block
    #elif COND        alternative branch
    #else             catch-all branch
    #endif            close the block
    #define TAG       add TAG to the tag context
    #undef TAG        remove TAG from the tag context

Any other word after the marker is passed through unchanged, except that
whitespace between the marker and the word and the single whitespace
character ending the word are dropped.

Nesting is handled by recursion: block_interpret() calls stream_consume()
for each branch body, which calls block_interpret() again for nested ifs.
Each level knows three things:

    condition   the guard of the branch being scanned evaluated true
    once_true   an earlier branch of this if-chain was already selected
    ignore      an enclosing block is suppressed

A branch body is emitted only when none of ignore, once_true, or
not-condition holds.

Example:
    >>> preprocess_text("#if linux\\nyes\\n#else\\nno\\n#endif\\n", tags={"linux"})
    'yes\\n'
"""

import io
from typing import Any, Dict, Iterable, List, Optional, TextIO

from ..config import appsettings
from ..models.context import TagContext
from ..models.directives import Operation, ScannedDirective, BRANCH_OPERATIONS
from ..models.errors import DirectiveError
from .stream import CharStream
from .scanner import operation_extract, tag_read
from .lexer import ExpressionLexer
from .evaluator import condition_evaluate
from .log import LOG


class Preprocessor:
    """
    Interpreter for one input stream

    Attributes:
        stream: Character input with push-back
        output: Output sink, written incrementally
        context: Tag context shared by every nesting level of this run
        marker: Directive marker character
        max_depth: Nesting depth at which the run is aborted
        strict: Treat malformed operators as errors
        warnings: Non-fatal diagnostics collected during the run
        directive_count: Number of directives scanned
    """

    def __init__(
        self,
        instream: TextIO,
        outstream: TextIO,
        context: Optional[TagContext] = None,
        marker: Optional[str] = None,
        max_depth: Optional[int] = None,
        strict: Optional[bool] = None,
    ):
        self.stream = CharStream(instream)
        self.output = outstream
        self.context = context if context is not None else TagContext()
        self.marker = appsettings.directive_marker if marker is None else marker
        self.max_depth = appsettings.max_depth if max_depth is None else max_depth
        self.strict = appsettings.strict_mode if strict is None else strict
        self.warnings: List[str] = []
        self.directive_count = 0

    def run(self) -> Dict[str, Any]:
        """
        Preprocess the whole input stream

        Returns:
            Dict containing:
                - status: bool (always True; failures raise)
                - directives: int (directives scanned)
                - warnings: List[str] (non-fatal diagnostics)
                - tags: List[str] (tags defined at end of input, sorted)

        Raises:
            PreprocessError: On any malformed directive or condition. Output
                             already written is not rolled back.
        """
        self.stream_consume(ignore=False, nested=False)
        return {
            'status': True,
            'directives': self.directive_count,
            'warnings': list(self.warnings),
            'tags': sorted(self.context.tags),
        }

    def stream_consume(self, ignore: bool, nested: bool) -> Optional[ScannedDirective]:
        """
        Copy text and interpret directives until a branch directive or EOF

        Args:
            ignore: Suppress output and tag changes for this span
            nested: Called for the body of an if block. elif/else/endif then
                    end the span; at top level they are passed through.

        Returns:
            The elif/else/endif directive that ended the span, or None when
            the stream ran out.
        """
        for c in self.stream:
            if c != self.marker:
                if not ignore:
                    self.output.write(c)
                continue

            directive = operation_extract(self.stream)
            self.directive_count += 1
            LOG(
                f"{self.marker}{directive.word} on line {directive.line_number} "
                f"(depth {self.context.depth}, {'ignored' if ignore else 'active'})",
                level=3,
            )
            operation = directive.operation

            if operation is Operation.IF:
                self.block_interpret(directive, ignore)
            elif operation in BRANCH_OPERATIONS:
                if nested:
                    return directive
                self.warning_add(f"'{directive.word}' outside of an if block", directive)
                self.directive_echo(directive, ignore)
            elif operation is Operation.DEFINE:
                tag = self.tag_get(directive, ignore)
                if not ignore:
                    self.context.tag_define(tag)
            elif operation is Operation.UNDEF:
                tag = self.tag_get(directive, ignore)
                if not ignore:
                    self.context.tag_undefine(tag)
            else:
                self.directive_echo(directive, ignore)
        return None

    def block_interpret(self, opening: ScannedDirective, ignore: bool) -> None:
        """
        Interpret an if/elif/else/endif chain

        Called right after the 'if' keyword; returns after the matching
        'endif'. Once a branch has been selected, later elif guards are not
        even lexed: their text becomes part of the suppressed body.

        Raises:
            DirectiveError: If the stream ends before 'endif' or the nesting
                            depth exceeds max_depth
        """
        if ignore:
            self.condition_discard(opening)
            condition = False
        else:
            condition = self.condition_read(opening)
        once_true = False

        self.context.depth += 1
        if self.context.depth > self.max_depth:
            raise DirectiveError(
                f"Conditional nesting exceeds maximum depth of {self.max_depth}",
                opening.line_number,
            )

        while True:
            closing = self.stream_consume(ignore or once_true or not condition, nested=True)
            if closing is None:
                raise DirectiveError("Unterminated 'if' block", opening.line_number)
            if closing.operation is Operation.ENDIF:
                break

            if condition:
                once_true = True

            if once_true:
                condition = False
            elif closing.operation is Operation.ELIF:
                condition = self.condition_read(closing)
            else:
                condition = True

        self.context.depth -= 1

    def condition_read(self, directive: ScannedDirective) -> bool:
        """Lex and evaluate the guard following an if/elif keyword"""
        lexer = self.lexer_make(directive)
        return condition_evaluate(lexer, self.context)

    def condition_discard(self, directive: ScannedDirective) -> None:
        """Lex the guard of a suppressed if so its line is consumed"""
        if not directive.line_ended:
            ExpressionLexer(self.stream, strict=False)

    def lexer_make(self, directive: ScannedDirective) -> ExpressionLexer:
        if directive.line_ended:
            # Nothing follows the keyword: an empty condition
            return ExpressionLexer(CharStream(io.StringIO()), strict=self.strict)
        lexer = ExpressionLexer(self.stream, strict=self.strict)
        self.warnings.extend(lexer.warnings)
        return lexer

    def tag_get(self, directive: ScannedDirective, ignore: bool) -> str:
        """
        Read the tag of a define/undef directive

        Raises:
            DirectiveError: If the tag is missing and the directive is active
        """
        tag = tag_read(self.stream, directive)
        if not tag and not ignore:
            kind = directive.operation.value.capitalize()
            raise DirectiveError(f"{kind} statement without tag", directive.line_number)
        return tag

    def directive_echo(self, directive: ScannedDirective, ignore: bool) -> None:
        if not ignore:
            self.output.write(self.marker + directive.word)

    def warning_add(self, message: str, directive: ScannedDirective) -> None:
        self.warnings.append(message)
        LOG(f"Warning: {message} (line {directive.line_number})", level=1)


def preprocess(
    instream: TextIO,
    outstream: TextIO,
    tags: Iterable[str] = (),
    **kwargs: Any,
) -> Dict[str, Any]:
    """
    Preprocess one stream with a fresh tag context

    Args:
        instream: Readable text stream
        outstream: Writable text stream
        tags: Predefined tags seeding the context
        **kwargs: Passed to Preprocessor (marker, max_depth, strict)

    Returns:
        Result dict from Preprocessor.run()
    """
    context = TagContext.context_createFromTags(tags)
    return Preprocessor(instream, outstream, context=context, **kwargs).run()


def preprocess_text(source: str, tags: Iterable[str] = (), **kwargs: Any) -> str:
    """Preprocess a string and return the output text"""
    output = io.StringIO()
    preprocess(io.StringIO(source), output, tags, **kwargs)
    return output.getvalue()
