"""Logging rule: direct calls to console output routines."""

from __future__ import annotations

from sharpcheck.analysis.imports import ImportScope, expression_from_node, iter_nodes
from sharpcheck.analysis.resolver import CallTarget, ReferenceResolver
from sharpcheck.config.constants import CATEGORY_LOGGING, LOGGING_ID, LOGGING_MESSAGE_FORMAT
from sharpcheck.config.models import CallTargetConfig, ConsoleOutputConfig
from sharpcheck.core.cancellation import NONE, CancellationToken
from sharpcheck.rules.models import Diagnostic
from sharpcheck.syntax.parser import SyntaxTree
from sharpcheck.syntax.tree import TextSpan

_INVOCATION_KINDS = frozenset(("invocation_expression",))


def targets_from_config(configs: list[CallTargetConfig]) -> list[CallTarget]:
    """Expand ``{namespace, type, members}`` entries into CallTargets, in order."""
    return [
        CallTarget(tuple(cfg.namespace.split(".")), cfg.type, member)
        for cfg in configs
        for member in cfg.members
    ]


class ConsoleOutputAnalyzer:
    """Reports invocations that resolve to a tracked console routine.

    Targets are tried in configuration order (``WriteLine`` before ``Write``
    by default); an invocation is reported at most once.
    """

    rule_id = LOGGING_ID

    def __init__(self, config: ConsoleOutputConfig | None = None) -> None:
        config = config or ConsoleOutputConfig()
        self._targets = targets_from_config(config.targets)

    @property
    def targets(self) -> list[CallTarget]:
        return list(self._targets)

    def analyze(self, tree: SyntaxTree, cancellation: CancellationToken = NONE) -> list[Diagnostic]:
        root = tree.ts_root
        resolver = ReferenceResolver(ImportScope.from_tree(root), cancellation)
        diagnostics: list[Diagnostic] = []
        for node in iter_nodes(root, _INVOCATION_KINDS):
            cancellation.raise_if_cancelled()
            function = node.child_by_field_name("function")
            if function is None:
                function = node.named_children[0] if node.named_children else None
            call = expression_from_node(function)
            target = next((t for t in self._targets if resolver.matches(call, t)), None)
            if target is None:
                continue
            diagnostics.append(
                Diagnostic.at(
                    tree,
                    TextSpan(node.start_byte, node.end_byte),
                    rule_id=LOGGING_ID,
                    message=LOGGING_MESSAGE_FORMAT.format(target=target.qualified_name),
                    category=CATEGORY_LOGGING,
                )
            )
        return diagnostics
