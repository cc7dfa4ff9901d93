"""Tests for syntax/parser.py module.

Covers:
- CSharpParser.probe() (the parse probe)
- SyntaxTree line/column mapping
- get_parser() thread-local instances
"""

from __future__ import annotations

import threading

import pytest

from sharpcheck.syntax.parser import CSharpParser, ProbeResult, get_parser


class TestProbeResult:
    """Tests for ProbeResult.is_code."""

    def test_members_without_error_is_code(self) -> None:
        assert ProbeResult(member_count=1, has_error=False).is_code is True

    def test_error_is_never_code(self) -> None:
        assert ProbeResult(member_count=3, has_error=True).is_code is False

    def test_no_members_is_not_code(self) -> None:
        assert ProbeResult(member_count=0, has_error=False).is_code is False


class TestProbe:
    """Tests for CSharpParser.probe."""

    @pytest.mark.parametrize(
        "text",
        [
            "var a = 0;",
            "void Test()\n{\nvar a = 0;\n}",
            "Console.WriteLine(\"hello\");",
            "class Foo { }",
            "namespace N { class C { } }",
            "if (x > 0) { return; }",
        ],
    )
    def test_given_complete_code_when_probed_then_code(self, parser: CSharpParser, text: str) -> None:
        """Complete statements and declarations are code."""
        assert parser.probe(text).is_code is True

    @pytest.mark.parametrize(
        "text",
        [
            "test 1234;",
            "{",
            "}",
            "void Test()",
            "",
            "   \n\t",
        ],
    )
    def test_given_fragment_or_prose_when_probed_then_not_code(self, parser: CSharpParser, text: str) -> None:
        """Fragments, prose and blank text are not code."""
        assert parser.probe(text).is_code is False

    def test_given_using_directive_when_probed_then_not_code(self, parser: CSharpParser) -> None:
        """Directives parse, but are not members."""
        result = parser.probe("using System;")

        assert result.has_error is False
        assert result.member_count == 0
        assert result.is_code is False

    def test_given_property_when_probed_then_code_via_class_body(self, parser: CSharpParser) -> None:
        """Member-only syntax is accepted inside a wrapping class."""
        assert parser.probe("public int Count { get; set; }").is_code is True

    def test_given_blank_when_probed_then_parser_not_consulted(self, parser: CSharpParser) -> None:
        """Blank text short-circuits to an empty result."""
        assert parser.probe("  ") == ProbeResult(member_count=0, has_error=False)


class TestSyntaxTree:
    """Tests for SyntaxTree helpers."""

    def test_given_offsets_when_line_column_then_one_based(self, parser: CSharpParser) -> None:
        """Line and column are 1-based."""
        tree = parser.parse("int a;\n  int b;\n")

        assert tree.line_column(0) == (1, 1)
        assert tree.line_column(9) == (2, 3)

    def test_given_multibyte_text_when_line_column_then_counts_characters(self, parser: CSharpParser) -> None:
        """Columns count characters, not UTF-8 bytes."""
        source = 'var s = "é"; // x\n'
        tree = parser.parse(source)
        comment = tree.comments()[0]

        assert tree.line_column(comment.span.start) == (1, source.index("//") + 1)

    def test_given_offset_when_starts_line_then_only_blanks_before(self, parser: CSharpParser) -> None:
        tree = parser.parse("int a; // x\n    // y\n")
        first, second = tree.comments()

        assert tree.starts_line(first.span.start) is False
        assert tree.starts_line(second.span.start) is True

    def test_given_path_when_parsed_then_kept(self, parser: CSharpParser) -> None:
        tree = parser.parse("int a;", path="Program.cs")

        assert tree.path == "Program.cs"
        assert tree.text == "int a;"

    def test_given_span_when_span_text_then_decoded(self, parser: CSharpParser) -> None:
        tree = parser.parse("/* é */\n")
        comment = tree.comments()[0]

        assert tree.span_text(comment.span) == "/* é */"


class TestGetParser:
    """Tests for get_parser."""

    def test_same_thread_reuses_instance(self) -> None:
        assert get_parser() is get_parser()

    def test_other_thread_gets_own_instance(self) -> None:
        """Parsers are never shared between threads."""
        seen: list[CSharpParser] = []

        worker = threading.Thread(target=lambda: seen.append(get_parser()))
        worker.start()
        worker.join()

        assert seen[0] is not get_parser()
