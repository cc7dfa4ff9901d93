"""Tree-sitter parsing for C# sources and comment fragments.

This module provides:
- Full-file parsing into a ``SyntaxTree`` (tree-sitter tree + lossless
  token/trivia tree + line/column mapping)
- The parse probe: does an arbitrary fragment parse as a complete C# unit?

One ``CSharpParser`` wraps one ``tree_sitter.Parser`` and is not safe to share
between threads; use ``get_parser()`` for a per-thread instance.
"""

from __future__ import annotations

import threading
from bisect import bisect_right
from dataclasses import dataclass, field
from functools import cache
from typing import TYPE_CHECKING, Any

from sharpcheck.core.errors import AnalysisError
from sharpcheck.syntax.tree import SyntaxNode, TextSpan, Trivia, build_syntax_tree

if TYPE_CHECKING:
    from tree_sitter import Language, Node

GRAMMAR_PACKAGE = "tree-sitter-c-sharp"

# Top-level children that are not members of a compilation unit
NON_MEMBER_KINDS: frozenset[str] = frozenset(
    (
        "comment",
        "using_directive",
        "extern_alias_directive",
        "global_attribute",
        "global_attribute_list",
        "shebang_directive",
    )
)

# Fragments that only parse inside a type body (fields, properties, methods
# with modifiers) are retried wrapped in this class.
_PROBE_CLASS_OPEN = b"class __SharpCheckProbe__\n{\n"
_PROBE_CLASS_CLOSE = b"\n}\n"


@cache
def _load_language() -> Language:
    try:
        import tree_sitter
        import tree_sitter_c_sharp
    except ImportError as e:
        raise AnalysisError.grammar_unavailable(GRAMMAR_PACKAGE) from e
    return tree_sitter.Language(tree_sitter_c_sharp.language())


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Outcome of parsing a fragment as a standalone compilation unit."""

    member_count: int
    has_error: bool

    @property
    def is_code(self) -> bool:
        return self.member_count > 0 and not self.has_error


@dataclass
class SyntaxTree:
    """A parsed C# file.

    ``ts_tree`` is the raw tree-sitter tree (used for node queries such as
    invocations and using directives); ``root`` is the lossless token/trivia
    tree (used for comments and edits).
    """

    source: bytes
    ts_tree: Any  # tree_sitter.Tree
    root: SyntaxNode
    path: str = "<memory>"
    _line_starts: list[int] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        starts = [0]
        index = self.source.find(b"\n")
        while index != -1:
            starts.append(index + 1)
            index = self.source.find(b"\n", index + 1)
        self._line_starts = starts

    @property
    def text(self) -> str:
        return self.source.decode("utf-8", "replace")

    @property
    def ts_root(self) -> Node:
        return self.ts_tree.root_node

    def trivia(self) -> list[Trivia]:
        return list(self.root.trivia())

    def comments(self) -> list[Trivia]:
        return [t for t in self.root.trivia() if t.kind.is_comment]

    def line_column(self, offset: int) -> tuple[int, int]:
        """1-based line and character column of a byte offset."""
        line_index = bisect_right(self._line_starts, offset) - 1
        line_start = self._line_starts[line_index]
        column = len(self.source[line_start:offset].decode("utf-8", "replace")) + 1
        return line_index + 1, column

    def starts_line(self, offset: int) -> bool:
        """True when only blanks precede ``offset`` on its line."""
        line_index = bisect_right(self._line_starts, offset) - 1
        return not self.source[self._line_starts[line_index] : offset].strip()

    def span_text(self, span: TextSpan) -> str:
        return self.source[span.start : span.end].decode("utf-8", "replace")


class CSharpParser:
    """Tree-sitter C# parser.

    Usage::

        parser = CSharpParser()
        tree = parser.parse(source, path="Program.cs")
        parser.probe("var a = 0;").is_code  # True
    """

    def __init__(self) -> None:
        import tree_sitter

        self._parser = tree_sitter.Parser()
        self._parser.language = _load_language()

    def parse(self, content: bytes | str, path: str = "<memory>") -> SyntaxTree:
        """Parse a whole file."""
        source = content.encode("utf-8") if isinstance(content, str) else content
        ts_tree = self._parser.parse(source)
        root = build_syntax_tree(ts_tree.root_node, source)
        return SyntaxTree(source=source, ts_tree=ts_tree, root=root, path=path)

    def probe(self, text: str) -> ProbeResult:
        """Parse ``text`` as a standalone unit and report completeness.

        A fragment counts as code when it yields at least one member and the
        tree carries no ERROR or MISSING node. Fragments that fail at top
        level are retried as the body of a class.
        """
        if not text.strip():
            return ProbeResult(member_count=0, has_error=False)
        fragment = text.encode("utf-8")
        root = self._parser.parse(fragment).root_node
        result = ProbeResult(member_count=_count_members(root.named_children), has_error=root.has_error)
        if result.is_code or not result.has_error:
            return result

        wrapped_root = self._parser.parse(_PROBE_CLASS_OPEN + fragment + _PROBE_CLASS_CLOSE).root_node
        body = _class_body(wrapped_root)
        if body is None:
            return result
        return ProbeResult(
            member_count=_count_members(body.named_children),
            has_error=wrapped_root.has_error,
        )


def _count_members(children: list[Node]) -> int:
    return sum(
        1 for c in children if c.type not in NON_MEMBER_KINDS and not c.type.startswith("preproc")
    )


def _class_body(root: Node) -> Node | None:
    classes = [c for c in root.named_children if c.type == "class_declaration"]
    if len(classes) != 1:
        return None
    body = classes[0].child_by_field_name("body")
    if body is not None:
        return body
    return next((c for c in classes[0].named_children if c.type == "declaration_list"), None)


_local = threading.local()


def get_parser() -> CSharpParser:
    """Get this thread's parser, creating it on first use."""
    parser = getattr(_local, "parser", None)
    if parser is None:
        parser = CSharpParser()
        _local.parser = parser
    return parser
