"""Expression shapes and using directives read off the tree-sitter tree.

Names are reduced to a small tagged union so the resolver can dispatch with
``match``:

- ``Identifier("Console")``
- ``MemberAccess(Identifier("System"), "Console")`` for ``System.Console``,
  whether tree-sitter produced a member access or a qualified name
- ``AliasQualified("global", "System")`` for ``global::System``
- ``Unsupported(kind)`` for every other shape (generic names, calls, ...)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from tree_sitter import Node

GLOBAL_ALIAS = "global"


@dataclass(frozen=True, slots=True)
class Identifier:
    name: str


@dataclass(frozen=True, slots=True)
class MemberAccess:
    left: Expression
    name: str


@dataclass(frozen=True, slots=True)
class AliasQualified:
    alias: str
    name: str


@dataclass(frozen=True, slots=True)
class Unsupported:
    kind: str


Expression = Union[Identifier, MemberAccess, AliasQualified, Unsupported]


def _text(node: Node) -> str:
    return (node.text or b"").decode("utf-8", "replace")


def _field_or(node: Node, name: str, index: int) -> Node | None:
    child = node.child_by_field_name(name)
    if child is not None:
        return child
    named = [c for c in node.named_children if c.type != "comment"]
    if not named:
        return None
    return named[index] if -len(named) <= index < len(named) else None


def expression_from_node(node: Node | None) -> Expression:
    """Reduce a tree-sitter name/expression node to an ``Expression``."""
    if node is None:
        return Unsupported("none")
    kind = node.type
    if kind == "identifier":
        return Identifier(_text(node))
    if kind in ("member_access_expression", "qualified_name"):
        left = _field_or(node, "expression" if kind == "member_access_expression" else "qualifier", 0)
        name = _field_or(node, "name", -1)
        if left is None or name is None or name.type != "identifier" or left == name:
            return Unsupported(kind)
        return MemberAccess(expression_from_node(left), _text(name))
    if kind == "alias_qualified_name":
        alias = node.child_by_field_name("alias") or (node.children[0] if node.children else None)
        name = _field_or(node, "name", -1)
        if alias is None or name is None or name.type != "identifier" or alias == name:
            return Unsupported(kind)
        return AliasQualified(_text(alias), _text(name))
    return Unsupported(kind)


def dotted_name(expr: Expression) -> str | None:
    """``System.Console`` style rendering, None for unsupported shapes."""
    match expr:
        case Identifier(name=name):
            return name
        case MemberAccess(left=left, name=name):
            prefix = dotted_name(left)
            return None if prefix is None else f"{prefix}.{name}"
        case AliasQualified(alias=alias, name=name):
            return f"{alias}::{name}"
        case _:
            return None


class ImportKind(Enum):
    NAMESPACE = "namespace"  # using System;
    STATIC = "static"  # using static System.Console;
    ALIAS = "alias"  # using s = System;  /  using c = System.Console;


@dataclass(frozen=True, slots=True)
class ImportDirective:
    """One ``using`` directive.

    An alias directive is syntactically the same whether it names a namespace
    or a type; the resolver decides by where the alias is used.
    """

    kind: ImportKind
    path: Expression
    alias: str | None = None

    @property
    def type_name(self) -> str | None:
        """Rightmost segment of the path."""
        match self.path:
            case Identifier(name=name) | MemberAccess(name=name) | AliasQualified(name=name):
                return name
            case _:
                return None

    @classmethod
    def from_node(cls, node: Node) -> ImportDirective | None:
        """Build from a ``using_directive`` node; None if it has no usable path."""
        named = [c for c in node.named_children if c.type != "comment"]
        if not named:
            return None
        is_static = any(c.type == "static" for c in node.children)
        has_equals = any(c.type == "=" for c in node.children)
        name_equals = next((c for c in named if c.type == "name_equals"), None)

        alias: str | None = None
        if name_equals is not None:
            alias_node = next((c for c in name_equals.named_children if c.type == "identifier"), None)
            alias = _text(alias_node) if alias_node is not None else None
            rest = [c for c in named if c != name_equals]
            path_node = rest[-1] if rest else None
        elif has_equals and len(named) >= 2:
            alias = _text(named[0])
            path_node = named[-1]
        else:
            path_node = named[-1]

        if alias is not None:
            return cls(ImportKind.ALIAS, expression_from_node(path_node), alias)
        kind = ImportKind.STATIC if is_static else ImportKind.NAMESPACE
        return cls(kind, expression_from_node(path_node))


def iter_nodes(root: Node, kinds: frozenset[str]) -> Iterator[Node]:
    """Pre-order walk yielding nodes of the given kinds (iterative)."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in kinds:
            yield node
        stack.extend(reversed(node.children))


_USING_KINDS = frozenset(("using_directive",))


@dataclass
class ImportScope:
    """Using directives of one file, indexed for alias lookups."""

    directives: list[ImportDirective] = field(default_factory=list)
    _aliases: dict[str, ImportDirective] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        for directive in self.directives:
            if directive.kind is ImportKind.ALIAS and directive.alias is not None:
                # First declaration wins; duplicates do not compile anyway
                self._aliases.setdefault(directive.alias, directive)

    @classmethod
    def from_directives(cls, directives: Iterable[ImportDirective]) -> ImportScope:
        return cls(list(directives))

    @classmethod
    def from_tree(cls, root: Node) -> ImportScope:
        """Collect every using directive in the file, nested namespaces included."""
        directives = (ImportDirective.from_node(n) for n in iter_nodes(root, _USING_KINDS))
        return cls([d for d in directives if d is not None])

    def alias(self, name: str) -> ImportDirective | None:
        return self._aliases.get(name)

    @property
    def static_imports(self) -> list[ImportDirective]:
        return [d for d in self.directives if d.kind is ImportKind.STATIC]
