"""Lossless, persistent token/trivia tree built from a tree-sitter parse.

tree-sitter keeps comments as "extra" nodes and does not materialize
whitespace at all. The analyzers need both, attached to tokens the way
Roslyn attaches them:

- a token's trailing trivia runs up to and including the first end-of-line
  after it;
- everything else between two tokens is leading trivia of the second token;
- trivia after the last real token is leading trivia of a synthetic
  ``end_of_file`` token.

Nodes and tokens are frozen. Edits (``SyntaxNode.replace``) return a new root
that shares every untouched subtree with the old one. Spans always refer to
byte offsets in the source the tree was originally parsed from; edited
elements keep the spans of the elements they replace.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from tree_sitter import Node


@dataclass(frozen=True, slots=True)
class TextSpan:
    """Half-open byte range ``[start, end)``."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def contains(self, other: TextSpan) -> bool:
        return self.start <= other.start and other.end <= self.end

    def overlaps(self, other: TextSpan) -> bool:
        return max(self.start, other.start) < min(self.end, other.end)

    @classmethod
    def from_bounds(cls, start: int, end: int) -> TextSpan:
        if end < start:
            raise ValueError(f"Span end {end} precedes start {start}")
        return cls(start, end)


class TriviaKind(Enum):
    """Kind of non-semantic text attached to a token."""

    SINGLE_LINE_COMMENT = "single_line_comment"
    MULTI_LINE_COMMENT = "multi_line_comment"
    WHITESPACE = "whitespace"
    END_OF_LINE = "end_of_line"
    SKIPPED = "skipped"  # non-blank text tree-sitter did not turn into a token

    @property
    def is_comment(self) -> bool:
        return self in (TriviaKind.SINGLE_LINE_COMMENT, TriviaKind.MULTI_LINE_COMMENT)

    @property
    def is_blank(self) -> bool:
        return self in (TriviaKind.WHITESPACE, TriviaKind.END_OF_LINE)


@dataclass(frozen=True, slots=True)
class Trivia:
    kind: TriviaKind
    text: str
    span: TextSpan


@dataclass(frozen=True, slots=True)
class SyntaxToken:
    """A leaf: token text plus its leading and trailing trivia."""

    kind: str
    text: str
    span: TextSpan
    leading: tuple[Trivia, ...] = ()
    trailing: tuple[Trivia, ...] = ()

    @property
    def full_span(self) -> TextSpan:
        start = self.leading[0].span.start if self.leading else self.span.start
        end = self.trailing[-1].span.end if self.trailing else self.span.end
        return TextSpan(start, end)

    def with_trivia(
        self,
        leading: tuple[Trivia, ...] | None = None,
        trailing: tuple[Trivia, ...] | None = None,
    ) -> SyntaxToken:
        return replace(
            self,
            leading=self.leading if leading is None else leading,
            trailing=self.trailing if trailing is None else trailing,
        )

    def tokens(self) -> Iterator[SyntaxToken]:
        yield self

    def to_source(self) -> str:
        parts = [t.text for t in self.leading]
        parts.append(self.text)
        parts.extend(t.text for t in self.trailing)
        return "".join(parts)


@dataclass(frozen=True, slots=True)
class SyntaxNode:
    """An interior node. Children are nodes or tokens in document order."""

    kind: str
    children: tuple[SyntaxElement, ...]

    def tokens(self) -> Iterator[SyntaxToken]:
        for child in self.children:
            yield from child.tokens()

    @property
    def first_token(self) -> SyntaxToken:
        return next(self.tokens())

    @property
    def last_token(self) -> SyntaxToken:
        child: SyntaxElement = self
        while isinstance(child, SyntaxNode):
            child = child.children[-1]
        return child

    @property
    def full_span(self) -> TextSpan:
        return TextSpan(self.first_token.full_span.start, self.last_token.full_span.end)

    @property
    def leading_trivia(self) -> tuple[Trivia, ...]:
        return self.first_token.leading

    @property
    def trailing_trivia(self) -> tuple[Trivia, ...]:
        return self.last_token.trailing

    def trivia(self) -> Iterator[Trivia]:
        """All trivia below this node in document order."""
        for token in self.tokens():
            yield from token.leading
            yield from token.trailing

    def to_source(self) -> str:
        return "".join(token.to_source() for token in self.tokens())

    def find_element(self, span: TextSpan) -> SyntaxElement | None:
        """Return the deepest element whose full span contains ``span``."""
        if not self.full_span.contains(span):
            return None
        current: SyntaxElement = self
        while isinstance(current, SyntaxNode):
            for child in current.children:
                if child.full_span.contains(span):
                    current = child
                    break
            else:
                break
        return current

    def replace(self, old: SyntaxElement, new: SyntaxElement) -> SyntaxNode:
        """Return a copy of this subtree with ``old`` (by identity) swapped for ``new``."""
        if old is self:
            if not isinstance(new, SyntaxNode):
                raise TypeError("The root can only be replaced by a node")
            return new
        target = old.full_span
        children = list(self.children)
        for i, child in enumerate(children):
            if child is old:
                children[i] = new
                return replace(self, children=tuple(children))
            if isinstance(child, SyntaxNode) and child.full_span.contains(target):
                updated = child.replace(old, new)
                if updated is not child:
                    children[i] = updated
                    return replace(self, children=tuple(children))
        return self

    def replace_tokens(self, mapping: dict[int, SyntaxToken]) -> SyntaxNode:
        """Swap tokens keyed by ``id(old_token)``; untouched subtrees are shared."""
        changed = False
        children: list[SyntaxElement] = []
        for child in self.children:
            if isinstance(child, SyntaxToken):
                new_child: SyntaxElement = mapping.get(id(child), child)
            else:
                new_child = child.replace_tokens(mapping)
            changed = changed or new_child is not child
            children.append(new_child)
        return replace(self, children=tuple(children)) if changed else self


SyntaxElement = Union[SyntaxNode, SyntaxToken]

END_OF_FILE = "end_of_file"

# Node kinds kept whole. Their inner text must never be re-read as trivia.
ATOMIC_KINDS: frozenset[str] = frozenset(
    (
        "string_literal",
        "verbatim_string_literal",
        "raw_string_literal",
        "interpolated_string_expression",
        "character_literal",
    )
)

_GAP_RE = re.compile(rb"(?P<eol>\r\n|\r|\n)|(?P<ws>[ \t\f\v]+)|(?P<skipped>[^ \t\f\v\r\n]+)")


def _gap_trivia(source: bytes, start: int, end: int) -> list[Trivia]:
    pieces: list[Trivia] = []
    for m in _GAP_RE.finditer(source, start, end):
        group = m.lastgroup
        if group == "eol":
            kind = TriviaKind.END_OF_LINE
        elif group == "ws":
            kind = TriviaKind.WHITESPACE
        else:
            kind = TriviaKind.SKIPPED
        pieces.append(Trivia(kind, m.group().decode("utf-8", "replace"), TextSpan(m.start(), m.end())))
    return pieces


def _comment_trivia(source: bytes, node: Node) -> Trivia:
    text = source[node.start_byte : node.end_byte].decode("utf-8", "replace")
    kind = TriviaKind.SINGLE_LINE_COMMENT if text.startswith("//") else TriviaKind.MULTI_LINE_COMMENT
    return Trivia(kind, text, TextSpan(node.start_byte, node.end_byte))


class _Builder:
    """Two-pass conversion: flatten tokens and trivia, then rebuild the nesting."""

    def __init__(self, source: bytes) -> None:
        self._source = source
        self._pos = 0
        # Document-order stream of trivia and token indices
        self._stream: list[Trivia | int] = []
        self._raw_tokens: list[tuple[str, int, int]] = []

    def build(self, root: Node) -> SyntaxNode:
        skeleton = self._collect(root)
        self._emit_gap(len(self._source))
        eof_index = len(self._raw_tokens)
        self._raw_tokens.append((END_OF_FILE, len(self._source), len(self._source)))
        self._stream.append(eof_index)

        leading, trailing = self._attach_trivia()
        tokens = [
            SyntaxToken(
                kind=kind,
                text=self._source[start:end].decode("utf-8", "replace"),
                span=TextSpan(start, end),
                leading=leading[i],
                trailing=trailing[i],
            )
            for i, (kind, start, end) in enumerate(self._raw_tokens)
        ]

        def instantiate(item: tuple[str, list] | int) -> SyntaxElement:
            if isinstance(item, int):
                return tokens[item]
            kind, children = item
            return SyntaxNode(kind, tuple(instantiate(c) for c in children))

        if skeleton is None:
            root_children: list = []
        elif isinstance(skeleton, int):
            root_children = [skeleton]
        else:
            root_children = skeleton[1]
        return SyntaxNode(root.type, (*(instantiate(c) for c in root_children), tokens[eof_index]))

    def _emit_gap(self, until: int) -> None:
        if until > self._pos:
            self._stream.extend(_gap_trivia(self._source, self._pos, until))
            self._pos = until

    def _collect(self, node: Node) -> tuple[str, list] | int | None:
        if node.type == "comment":
            self._emit_gap(node.start_byte)
            self._stream.append(_comment_trivia(self._source, node))
            self._pos = node.end_byte
            return None
        if node.child_count == 0 or node.type in ATOMIC_KINDS:
            if node.end_byte <= node.start_byte:
                return None  # MISSING tokens have no text
            self._emit_gap(node.start_byte)
            index = len(self._raw_tokens)
            self._raw_tokens.append((node.type, node.start_byte, node.end_byte))
            self._stream.append(index)
            self._pos = node.end_byte
            return index
        children = [c for c in (self._collect(child) for child in node.children) if c is not None]
        if not children:
            return None
        return (node.type, children)

    def _attach_trivia(self) -> tuple[list[tuple[Trivia, ...]], list[tuple[Trivia, ...]]]:
        count = len(self._raw_tokens)
        leading: list[tuple[Trivia, ...]] = [()] * count
        trailing: list[tuple[Trivia, ...]] = [()] * count
        pending: list[Trivia] = []
        stream = self._stream
        i = 0
        while i < len(stream):
            item = stream[i]
            i += 1
            if not isinstance(item, int):
                pending.append(item)
                continue
            leading[item] = tuple(pending)
            pending = []
            after: list[Trivia] = []
            while i < len(stream):
                trivia = stream[i]
                if isinstance(trivia, int):
                    break
                after.append(trivia)
                i += 1
                if trivia.kind is TriviaKind.END_OF_LINE:
                    break
            trailing[item] = tuple(after)
        return leading, trailing


def build_syntax_tree(root: Node, source: bytes) -> SyntaxNode:
    """Convert a tree-sitter tree rooted at ``root`` into a lossless SyntaxNode."""
    return _Builder(source).build(root)
