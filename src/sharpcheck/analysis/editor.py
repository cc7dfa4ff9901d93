"""Trivia removal: delete a comment span from a syntax tree.

The editor never mutates its input. It locates the smallest element whose
full span contains the target, rebuilds the trivia lists of the tokens below
it that overlap the target, and returns a new root sharing everything else.
"""

from __future__ import annotations

from itertools import dropwhile, takewhile

from sharpcheck.syntax.tree import SyntaxNode, SyntaxToken, TextSpan, Trivia, TriviaKind


def clean_trivia(
    trivia: tuple[Trivia, ...],
    span: TextSpan,
    *,
    at_line_start: bool = True,
) -> tuple[Trivia, ...]:
    """Drop ``span`` from a trivia list.

    Trivia ending before ``span`` is kept. Trivia starting inside it is
    dropped, as is the whitespace right after it. When the removed text began
    its line, the end-of-line that follows is dropped as well so no blank line
    is left behind.

    Whitespace that merely touches the start of ``span`` does not count as
    "before" it, so a comment inline before code takes the line's indentation
    with it: ``    /* int y; */ int q;`` becomes ``int q;``.

    Lists that do not touch ``span`` are returned as-is.
    """
    if not trivia or trivia[0].span.start > span.end or trivia[-1].span.end < span.start:
        return trivia
    before = tuple(takewhile(lambda t: t.span.end < span.start, trivia))
    after = list(dropwhile(lambda t: t.span.start < span.end, trivia))
    after = list(dropwhile(lambda t: t.kind is TriviaKind.WHITESPACE, after))
    if at_line_start and after and after[0].kind is TriviaKind.END_OF_LINE:
        after = after[1:]
    return before + tuple(after)


def _overlaps(trivia: tuple[Trivia, ...], span: TextSpan) -> bool:
    return bool(trivia) and trivia[0].span.start < span.end and span.start < trivia[-1].span.end


def _line_start_before(root: SyntaxNode, offset: int) -> bool:
    """True when only whitespace precedes ``offset`` on its line."""
    blank = True
    for token in root.tokens():
        for trivia in (*token.leading, token, *token.trailing):
            if trivia.span.start >= offset:
                return blank
            if isinstance(trivia, Trivia) and trivia.kind is TriviaKind.END_OF_LINE:
                blank = True
            elif not (isinstance(trivia, Trivia) and trivia.kind is TriviaKind.WHITESPACE):
                blank = False
    return blank


def remove_span(
    root: SyntaxNode,
    span: TextSpan,
    *,
    at_line_start: bool | None = None,
) -> SyntaxNode:
    """Return a new root with the trivia covered by ``span`` removed.

    Args:
        root: Tree to edit (left untouched).
        span: Byte span of the comment block, in the tree's original source.
        at_line_start: Whether the span begins its line; computed from the
            tree when omitted.
    """
    owner = root.find_element(span)
    if owner is None:
        return root
    if at_line_start is None:
        at_line_start = _line_start_before(root, span.start)

    replacements: dict[int, SyntaxToken] = {}
    for token in owner.tokens():
        if not (_overlaps(token.leading, span) or _overlaps(token.trailing, span)):
            continue
        leading = clean_trivia(token.leading, span, at_line_start=at_line_start)
        trailing = clean_trivia(token.trailing, span, at_line_start=at_line_start)
        if leading is not token.leading or trailing is not token.trailing:
            replacements[id(token)] = token.with_trivia(leading, trailing)

    if not replacements:
        return root
    if isinstance(owner, SyntaxToken):
        return root.replace(owner, replacements[id(owner)])
    return root.replace(owner, owner.replace_tokens(replacements))
