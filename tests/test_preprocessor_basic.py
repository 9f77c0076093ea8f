"""
Basic preprocessor tests - plain text, single blocks, define/undef

Tests the streaming interpreter on flat (non-nested) input.
"""

import io

import pytest

from stpp.lib.preprocessor import Preprocessor, preprocess, preprocess_text
from stpp.models.context import TagContext
from stpp.models.errors import ConditionError, DirectiveError


class TestPlainText:
    """Input without directive markers passes through unchanged"""

    def test_empty_source(self):
        assert preprocess_text("") == ""

    def test_plain_text_identity(self):
        source = "line one\n  indented\ttabbed\n\nno trailing newline"
        assert preprocess_text(source) == source

    def test_identity_independent_of_tags(self):
        source = "some text\nmore text\n"
        assert preprocess_text(source, tags={"a", "b"}) == source

    def test_unicode_text(self):
        source = "naïve café ✓\n"
        assert preprocess_text(source) == source


class TestIfElse:
    """Single if/else blocks"""

    source = "before\n#if linux\nlinux body\n#else\nother body\n#endif\nafter\n"

    def test_if_true(self):
        assert preprocess_text(self.source, tags={"linux"}) == "before\nlinux body\nafter\n"

    def test_if_false_takes_else(self):
        assert preprocess_text(self.source) == "before\nother body\nafter\n"

    def test_if_without_else_suppressed(self):
        assert preprocess_text("a\n#if x\nhidden\n#endif\nb\n") == "a\nb\n"

    def test_directive_lines_vanish(self):
        assert preprocess_text("#if x\n#endif\n", tags={"x"}) == ""

    def test_text_before_marker_on_same_line(self):
        assert preprocess_text("  #if x\nbody\n#endif\n", tags={"x"}) == "  body\n"


class TestIfElifElse:
    """Exactly one branch of a chain is emitted"""

    source = "#if a\n1\n#elif b\n2\n#elif c\n3\n#else\n4\n#endif\n"

    @pytest.mark.parametrize("tags,expected", [
        ({"a"}, "1\n"),
        ({"b"}, "2\n"),
        ({"c"}, "3\n"),
        (set(), "4\n"),
        ({"a", "b", "c"}, "1\n"),
        ({"b", "c"}, "2\n"),
    ])
    def test_first_true_branch_wins(self, tags, expected):
        assert preprocess_text(self.source, tags=tags) == expected

    def test_elif_with_expression(self):
        source = "#if a\nA\n#elif b && !c\nB\n#endif\n"
        assert preprocess_text(source, tags={"b"}) == "B\n"
        assert preprocess_text(source, tags={"b", "c"}) == ""

    def test_skipped_branch_does_not_define(self):
        source = "#if a\nA\n#elif b\n#define X\n#endif\n#if X\nleaked\n#endif\n"
        assert preprocess_text(source, tags={"a", "b"}) == "A\n"

    def test_else_branch_does_not_define_after_match(self):
        source = "#if a\n#else\n#define X\n#endif\n#if X\nleaked\n#endif\n"
        assert preprocess_text(source, tags={"a"}) == ""

    def test_skipped_elif_guard_not_evaluated(self):
        """A malformed guard is harmless once an earlier branch matched"""
        source = "#if a\nA\n#elif ((\nB\n#endif\n"
        assert preprocess_text(source, tags={"a"}) == "A\n"

    def test_skipped_elif_guard_is_scanned_as_body(self):
        """A marker inside a skipped elif guard starts a directive"""
        source = "#if a\nA\n#elif b #endif\nafter\n"
        assert preprocess_text(source, tags={"a"}) == "A\nafter\n"


class TestDefineUndef:
    """Tag context mutation"""

    def test_define_then_if(self):
        assert preprocess_text("#define X\n#if X\nyes\n#endif\n") == "yes\n"

    def test_undef_then_if(self):
        source = "#define X\n#undef X\n#if X\nno\n#else\nyes\n#endif\n"
        assert preprocess_text(source) == "yes\n"

    def test_undef_predefined_tag(self):
        assert preprocess_text("#undef a\n#if a\nno\n#endif\n", tags={"a"}) == ""

    def test_define_inside_active_block(self):
        source = "#if a\n#define b\n#endif\n#if b\nyes\n#endif\n"
        assert preprocess_text(source, tags={"a"}) == "yes\n"

    def test_define_inside_suppressed_block(self):
        source = "#if a\n#define b\n#endif\n#if b\nyes\n#endif\n"
        assert preprocess_text(source) == ""

    def test_text_after_tag_is_kept(self):
        assert preprocess_text("#define X trailing\n") == "trailing\n"

    def test_final_tags_reported(self):
        result = preprocess(io.StringIO("#define b\n#undef c\n"), io.StringIO(), tags={"a", "c"})
        assert result["tags"] == ["a", "b"]

    def test_context_shared_with_caller(self):
        ctx = TagContext()
        Preprocessor(io.StringIO("#define keep\n"), io.StringIO(), context=ctx).run()
        assert "keep" in ctx
        assert ctx.depth == 0

    def test_define_without_tag(self):
        with pytest.raises(DirectiveError, match="Define statement without tag"):
            preprocess_text("#define\ntext\n")

    def test_undef_without_tag_aborts(self):
        output = io.StringIO()
        with pytest.raises(DirectiveError, match="Undef statement without tag"):
            preprocess(io.StringIO("before\n#undef   \nafter\n"), output)
        assert output.getvalue() == "before\n"

    def test_missing_tag_ignored_when_suppressed(self):
        assert preprocess_text("#if a\n#undef\n#endif\nok\n") == "ok\n"


class TestUnknownDirectives:
    """Unrecognized directive words pass through"""

    def test_unknown_echoed(self):
        assert preprocess_text("#include <stdio.h>\n") == "#include<stdio.h>\n"

    def test_whitespace_after_marker_lost(self):
        assert preprocess_text("# pragma once\n") == "#pragmaonce\n"

    def test_round_trip_except_adjacent_whitespace(self):
        source = "text #note here\nmore #tag\nend"
        assert preprocess_text(source) == "text #notehere\nmore #tagend"

    def test_unknown_suppressed_in_inactive_block(self):
        assert preprocess_text("#if a\n#pragma x\n#endif\n") == ""

    def test_lone_marker(self):
        # The newline ending the directive word is consumed
        assert preprocess_text("a # b\n") == "a #b"

    def test_stray_endif_passed_through_with_warning(self):
        output = io.StringIO()
        result = preprocess(io.StringIO("a\n#endif\nb\n"), output)
        assert output.getvalue() == "a\n#endifb\n"
        assert result["warnings"] == ["'endif' outside of an if block"]


class TestConditionDiagnostics:
    """Errors and warnings coming from guards"""

    def test_empty_if_condition(self):
        with pytest.raises(ConditionError, match="Expected condition but got nothing"):
            preprocess_text("#if\nbody\n#endif\n")

    def test_empty_elif_condition(self):
        with pytest.raises(ConditionError, match="Expected condition but got nothing"):
            preprocess_text("#if a\n#elif\n#endif\n")

    def test_error_reports_line(self):
        with pytest.raises(ConditionError) as excinfo:
            preprocess_text("one\ntwo\n#if (a\n#endif\n")
        assert excinfo.value.line_number == 3

    def test_malformed_operator_warning(self):
        output = io.StringIO()
        result = preprocess(io.StringIO("#if a & b\nyes\n#endif\n"), output, tags={"a", "b"})
        assert output.getvalue() == "yes\n"
        assert result["warnings"] == ["And operator is && not &"]

    def test_malformed_operator_strict(self):
        with pytest.raises(ConditionError, match=r"Or operator is \|\| not \|"):
            preprocess_text("#if a | b\n#endif\n", strict=True)

    def test_right_fold_in_directive(self):
        source = "#if a && b || c\nyes\n#else\nno\n#endif\n"
        assert preprocess_text(source, tags={"a", "c"}) == "yes\n"
        assert preprocess_text(source, tags={"c"}) == "no\n"


class TestConfiguration:
    """Preprocessor options"""

    def test_custom_marker(self):
        source = "@if a\nyes\n@endif\n#if b\n"
        assert preprocess_text(source, tags={"a"}, marker="@") == "yes\n#if b\n"

    def test_result_counts_directives(self):
        result = preprocess(io.StringIO("#if a\n#else\n#endif\n#x\n"), io.StringIO())
        assert result["status"] is True
        assert result["directives"] == 4
