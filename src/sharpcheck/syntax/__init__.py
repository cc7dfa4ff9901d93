"""Syntax module - tree-sitter parsing and the lossless token/trivia tree."""

from sharpcheck.syntax.parser import CSharpParser, ProbeResult, SyntaxTree, get_parser
from sharpcheck.syntax.tree import (
    SyntaxElement,
    SyntaxNode,
    SyntaxToken,
    TextSpan,
    Trivia,
    TriviaKind,
    build_syntax_tree,
)

__all__ = [
    "CSharpParser",
    "ProbeResult",
    "SyntaxElement",
    "SyntaxNode",
    "SyntaxToken",
    "SyntaxTree",
    "TextSpan",
    "Trivia",
    "TriviaKind",
    "build_syntax_tree",
    "get_parser",
]
