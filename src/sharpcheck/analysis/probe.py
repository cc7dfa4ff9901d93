"""Comment units and the code/not-code classifier."""

from __future__ import annotations

from dataclasses import dataclass

from sharpcheck.core.logging import get_logger
from sharpcheck.syntax.parser import CSharpParser, get_parser
from sharpcheck.syntax.tree import Trivia, TriviaKind

log = get_logger("analysis.probe")


def comment_text(trivia: Trivia) -> str:
    """Comment body without delimiters and surrounding spaces.

    ``// var a = 0;`` and ``/// var a = 0;`` give ``var a = 0;``;
    ``/* x */`` gives ``x``. Non-comment trivia gives an empty string.
    """
    text = trivia.text
    if trivia.kind is TriviaKind.SINGLE_LINE_COMMENT:
        return text.lstrip("/").strip(" ")
    if trivia.kind is TriviaKind.MULTI_LINE_COMMENT:
        body = text[2:-2] if text.endswith("*/") and len(text) >= 4 else text[2:]
        return body.strip(" ")
    return ""


@dataclass(frozen=True, slots=True)
class CommentUnit:
    trivia: Trivia
    text: str

    @classmethod
    def from_trivia(cls, trivia: Trivia) -> CommentUnit:
        return cls(trivia, comment_text(trivia))


class CodeClassifier:
    """Decides whether a piece of comment text is C# code.

    Results are memoized per classifier; the merge detector probes the same
    joined windows repeatedly for long comment runs.
    """

    def __init__(self, parser: CSharpParser | None = None) -> None:
        self._parser = parser
        self._cache: dict[str, bool] = {}

    @property
    def parser(self) -> CSharpParser:
        return self._parser if self._parser is not None else get_parser()

    def is_code(self, text: str) -> bool:
        if not text.strip():
            return False
        cached = self._cache.get(text)
        if cached is not None:
            return cached
        try:
            result = self.parser.probe(text).is_code
        except (ValueError, UnicodeError) as e:
            # Binding-level rejection of odd input is a negative probe, not a fault
            log.debug("probe_failed", error=str(e), length=len(text))
            result = False
        self._cache[text] = result
        return result
