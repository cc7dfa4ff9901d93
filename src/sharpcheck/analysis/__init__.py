"""Analysis module - comment classification, block merging, edits and call resolution."""

from sharpcheck.analysis.blocks import CommentBlock, group_blocks
from sharpcheck.analysis.editor import clean_trivia, remove_span
from sharpcheck.analysis.imports import (
    AliasQualified,
    Expression,
    Identifier,
    ImportDirective,
    ImportKind,
    ImportScope,
    MemberAccess,
    Unsupported,
    expression_from_node,
)
from sharpcheck.analysis.merge import IntervalSet, WindowMergeDetector
from sharpcheck.analysis.probe import CodeClassifier, CommentUnit, comment_text
from sharpcheck.analysis.resolver import CallTarget, ReferenceResolver, matches

__all__ = [
    # Comments
    "CodeClassifier",
    "CommentBlock",
    "CommentUnit",
    "IntervalSet",
    "WindowMergeDetector",
    "comment_text",
    "group_blocks",
    # Edits
    "clean_trivia",
    "remove_span",
    # Resolution
    "AliasQualified",
    "CallTarget",
    "Expression",
    "Identifier",
    "ImportDirective",
    "ImportKind",
    "ImportScope",
    "MemberAccess",
    "ReferenceResolver",
    "Unsupported",
    "expression_from_node",
    "matches",
]
