"""Qualified reference resolution for method calls.

Decides whether a call expression refers to a given
``namespace.Type.Member`` triple using only the file's syntax: the call's
own qualification, ``using static`` directives and ``using`` aliases. No
semantic model is involved, so a user type that shadows ``Console`` is
reported like the real one.

Namespace segments are matched right to left. ``resolve_namespace`` is
called with the index of the rightmost unmatched segment and moves one
segment to the left per qualification level; it only succeeds once the leaf
of the expression lands on segment 0.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sharpcheck.analysis.imports import (
    GLOBAL_ALIAS,
    AliasQualified,
    Expression,
    Identifier,
    ImportScope,
    MemberAccess,
)
from sharpcheck.core.cancellation import NONE, CancellationToken


@dataclass(frozen=True, slots=True)
class CallTarget:
    """A fully qualified member, e.g. ``System.Console.WriteLine``."""

    namespace: tuple[str, ...]
    type_name: str
    member_name: str

    @property
    def qualified_name(self) -> str:
        return ".".join((*self.namespace, self.type_name, self.member_name))

    @classmethod
    def parse(cls, dotted: str) -> CallTarget:
        """``"System.Diagnostics.Debug.WriteLine"`` -> CallTarget."""
        parts = dotted.split(".")
        if len(parts) < 2 or not all(parts):
            raise ValueError(f"Expected Type.Member or Namespace.Type.Member, got {dotted!r}")
        return cls(tuple(parts[:-2]), parts[-2], parts[-1])


class ReferenceResolver:
    """Matches call expressions against targets for one file's imports."""

    def __init__(self, imports: ImportScope, cancellation: CancellationToken = NONE) -> None:
        self._imports = imports
        self._cancellation = cancellation

    def matches(self, call: Expression, target: CallTarget) -> bool:
        """True if ``call`` (the invoked expression) resolves to ``target``."""
        self._cancellation.raise_if_cancelled()
        match call:
            case Identifier(name=name):
                # WriteLine() is only Console.WriteLine under `using static System.Console;`
                return name == target.member_name and any(
                    self._path_is_type(directive.path, target)
                    for directive in self._imports.static_imports
                )
            case MemberAccess(left=receiver, name=name):
                return name == target.member_name and self._receiver_is_type(receiver, target)
            case _:
                return False

    def _receiver_is_type(self, receiver: Expression, target: CallTarget) -> bool:
        match receiver:
            case Identifier(name=name):
                if name == target.type_name:
                    return True
                alias = self._imports.alias(name)
                return alias is not None and self._path_is_type(alias.path, target)
            case _:
                return self._path_is_type(receiver, target)

    def _path_is_type(self, path: Expression, target: CallTarget) -> bool:
        """True if ``path`` names ``target``'s type with a matching namespace."""
        segments = target.namespace
        match path:
            case Identifier(name=name):
                return name == target.type_name and not segments
            case MemberAccess(left=left, name=name):
                return name == target.type_name and self.resolve_namespace(left, segments, len(segments) - 1)
            case AliasQualified(alias=alias, name=name):
                if name != target.type_name:
                    return False
                if alias == GLOBAL_ALIAS:
                    return not segments
                return self._resolve_alias(alias, segments, len(segments) - 1, frozenset())
            case _:
                return False

    def resolve_namespace(
        self,
        expr: Expression,
        segments: Sequence[str],
        index: int,
        visited: frozenset[str] = frozenset(),
    ) -> bool:
        """True if ``expr`` spells ``segments[: index + 1]``."""
        self._cancellation.raise_if_cancelled()
        if index < 0:
            return False
        match expr:
            case Identifier(name=name):
                if index == 0 and name == segments[0]:
                    return True
                return self._resolve_alias(name, segments, index, visited)
            case AliasQualified(alias=alias, name=name):
                if alias == GLOBAL_ALIAS:
                    return index == 0 and name == segments[0]
                return name == segments[index] and self._resolve_alias(alias, segments, index - 1, visited)
            case MemberAccess(left=left, name=name):
                return name == segments[index] and self.resolve_namespace(left, segments, index - 1, visited)
            case _:
                return False

    def _resolve_alias(self, alias: str, segments: Sequence[str], index: int, visited: frozenset[str]) -> bool:
        if alias in visited:
            return False
        directive = self._imports.alias(alias)
        if directive is None:
            return False
        return self.resolve_namespace(directive.path, segments, index, visited | {alias})


def matches(
    call: Expression,
    target: CallTarget,
    imports: ImportScope,
    cancellation: CancellationToken = NONE,
) -> bool:
    """Convenience wrapper around ``ReferenceResolver.matches``."""
    return ReferenceResolver(imports, cancellation).matches(call, target)
