"""Tests for analysis/imports.py module.

Covers:
- expression_from_node() on real call expressions
- dotted_name()
- ImportDirective.from_node() for the three using forms
- ImportScope lookups
"""

from __future__ import annotations

import pytest

from sharpcheck.analysis.imports import (
    AliasQualified,
    Identifier,
    ImportDirective,
    ImportKind,
    ImportScope,
    MemberAccess,
    Unsupported,
    dotted_name,
    expression_from_node,
    iter_nodes,
)
from sharpcheck.syntax.parser import CSharpParser

SYSTEM = Identifier("System")
SYSTEM_CONSOLE = MemberAccess(SYSTEM, "Console")


def _called(parser: CSharpParser, statement: str) -> str | None:
    """dotted_name of the first invoked expression in ``statement``."""
    tree = parser.parse(statement)
    invocation = next(iter_nodes(tree.ts_root, frozenset(("invocation_expression",))))
    return dotted_name(expression_from_node(invocation.child_by_field_name("function")))


class TestExpressionFromNode:
    """Tests for expression_from_node."""

    @pytest.mark.parametrize(
        ("statement", "expected"),
        [
            ("WriteLine();", "WriteLine"),
            ("Console.WriteLine();", "Console.WriteLine"),
            ("System.Console.WriteLine();", "System.Console.WriteLine"),
            ("global::System.Console.WriteLine();", "global::System.Console.WriteLine"),
            ("s::Console.WriteLine();", "s::Console.WriteLine"),
        ],
    )
    def test_given_call_when_reduced_then_shape_kept(
        self, parser: CSharpParser, statement: str, expected: str
    ) -> None:
        assert _called(parser, statement) == expected

    def test_given_call_receiver_when_reduced_then_unsupported(self, parser: CSharpParser) -> None:
        """Shapes outside the union do not render."""
        assert _called(parser, "Get().Run();") is None

    def test_given_none_when_reduced_then_unsupported(self) -> None:
        assert expression_from_node(None) == Unsupported("none")


class TestDottedName:
    """Tests for dotted_name."""

    def test_nested(self) -> None:
        expr = MemberAccess(MemberAccess(AliasQualified("global", "System"), "Console"), "WriteLine")
        assert dotted_name(expr) == "global::System.Console.WriteLine"

    def test_unsupported_leaf_poisons_whole_name(self) -> None:
        assert dotted_name(MemberAccess(Unsupported("generic_name"), "Bar")) is None


class TestImportDirective:
    """Tests for ImportDirective.from_node."""

    def _directives(self, parser: CSharpParser, source: str) -> list[ImportDirective]:
        return ImportScope.from_tree(parser.parse(source).ts_root).directives

    def test_given_namespace_using_when_read_then_namespace_kind(self, parser: CSharpParser) -> None:
        (directive,) = self._directives(parser, "using System;\n")

        assert directive == ImportDirective(ImportKind.NAMESPACE, SYSTEM)
        assert directive.type_name == "System"

    def test_given_static_using_when_read_then_static_kind(self, parser: CSharpParser) -> None:
        (directive,) = self._directives(parser, "using static System.Console;\n")

        assert directive.kind is ImportKind.STATIC
        assert directive.path == SYSTEM_CONSOLE
        assert directive.type_name == "Console"

    @pytest.mark.parametrize(
        ("source", "alias", "path"),
        [
            ("using s = System;\n", "s", SYSTEM),
            ("using c = System.Console;\n", "c", SYSTEM_CONSOLE),
        ],
    )
    def test_given_alias_using_when_read_then_alias_kind(
        self, parser: CSharpParser, source: str, alias: str, path: object
    ) -> None:
        (directive,) = self._directives(parser, source)

        assert directive.kind is ImportKind.ALIAS
        assert directive.alias == alias
        assert directive.path == path

    def test_given_global_using_when_read_then_namespace_kind(self, parser: CSharpParser) -> None:
        (directive,) = self._directives(parser, "global using System;\n")

        assert directive.kind is ImportKind.NAMESPACE


class TestImportScope:
    """Tests for ImportScope."""

    def test_given_file_when_collected_then_nested_namespaces_included(self, parser: CSharpParser) -> None:
        """Directives inside namespace bodies are part of the scope."""
        # Given
        source = "using System;\nnamespace N\n{\n    using io = System.IO;\n    class A { }\n}\n"

        # When
        scope = ImportScope.from_tree(parser.parse(source).ts_root)

        # Then
        assert len(scope.directives) == 2
        alias = scope.alias("io")
        assert alias is not None
        assert alias.path == MemberAccess(SYSTEM, "IO")

    def test_given_duplicate_alias_when_indexed_then_first_wins(self) -> None:
        first = ImportDirective(ImportKind.ALIAS, SYSTEM, "s")
        second = ImportDirective(ImportKind.ALIAS, SYSTEM_CONSOLE, "s")

        scope = ImportScope.from_directives([first, second])

        assert scope.alias("s") is first

    def test_given_unknown_alias_when_looked_up_then_none(self) -> None:
        assert ImportScope().alias("s") is None

    def test_static_imports_only_static(self) -> None:
        static = ImportDirective(ImportKind.STATIC, SYSTEM_CONSOLE)
        scope = ImportScope.from_directives(
            [ImportDirective(ImportKind.NAMESPACE, SYSTEM), static, ImportDirective(ImportKind.ALIAS, SYSTEM, "s")]
        )

        assert scope.static_imports == [static]
