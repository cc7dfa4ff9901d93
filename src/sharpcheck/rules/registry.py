"""Rule registry - descriptors for all built-in rules."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from sharpcheck.core.cancellation import NONE, CancellationToken
from sharpcheck.rules.models import Diagnostic, Severity

if TYPE_CHECKING:
    from sharpcheck.config.models import SharpCheckConfig
    from sharpcheck.syntax.parser import SyntaxTree
    from sharpcheck.syntax.tree import SyntaxNode


class Analyzer(Protocol):
    """A per-file pass producing diagnostics for one rule."""

    def analyze(self, tree: SyntaxTree, cancellation: CancellationToken = NONE) -> list[Diagnostic]: ...


class FixableAnalyzer(Analyzer, Protocol):
    """An analyzer whose diagnostics can be removed by editing the tree."""

    def fix(self, tree: SyntaxTree, diagnostics: Iterable[Diagnostic]) -> SyntaxNode: ...


@dataclass
class Rule:
    """Read-only descriptor of a rule."""

    rule_id: str
    title: str
    message_format: str
    category: str
    description: str
    config_section: str  # SharpCheckConfig attribute holding `enabled`
    severity: Severity = Severity.WARNING
    fix_title: str | None = None  # None = no code fix

    # Analyzer factory (set by register)
    _factory: Callable[[SharpCheckConfig], Analyzer] | None = None

    @property
    def fixable(self) -> bool:
        return self.fix_title is not None

    def is_enabled(self, config: SharpCheckConfig) -> bool:
        section = getattr(config, self.config_section, None)
        return bool(getattr(section, "enabled", True))

    def create_analyzer(self, config: SharpCheckConfig) -> Analyzer:
        if self._factory is None:
            raise LookupError(f"Rule {self.rule_id} has no analyzer")
        return self._factory(config)


class RuleRegistry:
    """Registry of rules."""

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}

    def register(
        self,
        rule: Rule,
        factory: Callable[[SharpCheckConfig], Analyzer] | None = None,
    ) -> None:
        """Register a rule."""
        if factory is not None:
            rule._factory = factory
        self._rules[rule.rule_id] = rule

    def get(self, rule_id: str) -> Rule | None:
        """Get rule by ID."""
        return self._rules.get(rule_id)

    def all(self) -> list[Rule]:
        """Get all registered rules."""
        return list(self._rules.values())

    def enabled(self, config: SharpCheckConfig, rule_ids: Iterable[str] | None = None) -> list[Rule]:
        """Rules enabled in ``config``, optionally restricted to ``rule_ids``."""
        wanted = set(rule_ids) if rule_ids is not None else None
        return [
            rule
            for rule in self._rules.values()
            if rule.is_enabled(config) and (wanted is None or rule.rule_id in wanted)
        ]

    def clear(self) -> None:
        """Clear all registered rules."""
        self._rules.clear()


# Global registry
registry = RuleRegistry()
