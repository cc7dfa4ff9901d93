"""CommentCode rule: comments that contain disabled code.

Pipeline per file::

    comments -> CommentUnit texts -> WindowMergeDetector -> group_blocks
             -> one Diagnostic per block

The fix removes a block's text (and the indentation/line break it leaves
behind) from the token/trivia tree and returns the new root.
"""

from __future__ import annotations

from collections.abc import Iterable

from sharpcheck.analysis.blocks import CommentBlock, group_blocks
from sharpcheck.analysis.editor import remove_span
from sharpcheck.analysis.merge import WindowMergeDetector
from sharpcheck.analysis.probe import CodeClassifier, CommentUnit
from sharpcheck.config.constants import CATEGORY_COMMENTARY, COMMENT_CODE_ID, COMMENT_CODE_MESSAGE
from sharpcheck.config.models import CommentCodeConfig
from sharpcheck.core.cancellation import NONE, CancellationToken
from sharpcheck.core.logging import get_logger
from sharpcheck.rules.models import Diagnostic
from sharpcheck.syntax.parser import CSharpParser, SyntaxTree
from sharpcheck.syntax.tree import SyntaxNode

log = get_logger("analysis.comment_code")


class CommentCodeAnalyzer:
    """Reports blocks of comments whose text parses as C# code."""

    rule_id = COMMENT_CODE_ID

    def __init__(self, config: CommentCodeConfig | None = None, *, parser: CSharpParser | None = None) -> None:
        self._config = config or CommentCodeConfig()
        self._parser = parser

    def find_blocks(self, tree: SyntaxTree, cancellation: CancellationToken = NONE) -> list[CommentBlock]:
        trivia = tree.trivia()
        units = [CommentUnit.from_trivia(t) for t in trivia if t.kind.is_comment]
        if not units:
            return []
        detector = WindowMergeDetector(
            CodeClassifier(self._parser).is_code,
            backward_probe=self._config.backward_probe,
            max_window=self._config.max_window,
        )
        flagged = detector.detect([unit.text for unit in units], cancellation)
        return group_blocks([units[i] for i in flagged], trivia)

    def analyze(self, tree: SyntaxTree, cancellation: CancellationToken = NONE) -> list[Diagnostic]:
        blocks = self.find_blocks(tree, cancellation)
        diagnostics = [
            Diagnostic.at(
                tree,
                block.span,
                rule_id=COMMENT_CODE_ID,
                message=COMMENT_CODE_MESSAGE,
                category=CATEGORY_COMMENTARY,
                fixable=True,
            )
            for block in blocks
        ]
        if diagnostics:
            log.debug("comment_code_found", path=tree.path, blocks=len(diagnostics))
        return diagnostics

    def fix(self, tree: SyntaxTree, diagnostics: Iterable[Diagnostic]) -> SyntaxNode:
        """Remove every CommentCode block named by ``diagnostics``.

        Blocks are removed last to first so each edit only touches trivia
        that no later edit depends on.
        """
        root = tree.root
        spans = sorted(
            {d.span for d in diagnostics if d.rule_id == COMMENT_CODE_ID},
            key=lambda span: span.start,
            reverse=True,
        )
        for span in spans:
            root = remove_span(root, span, at_line_start=tree.starts_line(span.start))
        return root
