"""Grouping of flagged comments into contiguous blocks."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sharpcheck.analysis.probe import CommentUnit
from sharpcheck.syntax.tree import TextSpan, Trivia


@dataclass(frozen=True, slots=True)
class CommentBlock:
    """Consecutive flagged comments separated only by blank trivia."""

    units: tuple[CommentUnit, ...]

    @property
    def span(self) -> TextSpan:
        return TextSpan(self.units[0].trivia.span.start, self.units[-1].trivia.span.end)

    @property
    def text(self) -> str:
        return "\n".join(unit.text for unit in self.units)


def _located_together(trivia: Sequence[Trivia], first: int, second: int) -> bool:
    """True if only whitespace/newlines, and no token, lie between two trivia."""
    previous = trivia[first]
    for k in range(first + 1, second + 1):
        current = trivia[k]
        # A gap between consecutive trivia means a token sits between them
        if current.span.start != previous.span.end:
            return False
        if k < second and not current.kind.is_blank:
            return False
        previous = current
    return True


def group_blocks(units: Sequence[CommentUnit], trivia: Sequence[Trivia]) -> list[CommentBlock]:
    """Group flagged units (document order) into blocks.

    ``trivia`` is the file's full trivia sequence; every unit's trivia must be
    an element of it.
    """
    position = {t.span.start: k for k, t in enumerate(trivia)}
    blocks: list[list[CommentUnit]] = []
    for unit in units:
        if blocks:
            last = blocks[-1][-1]
            if _located_together(trivia, position[last.trivia.span.start], position[unit.trivia.span.start]):
                blocks[-1].append(unit)
                continue
        blocks.append([unit])
    return [CommentBlock(tuple(block)) for block in blocks]
