"""Rules module - rule registry, diagnostics, and check/fix operations."""

# Import definitions to register all rules
from sharpcheck.rules import definitions as _definitions  # noqa: F401
from sharpcheck.rules.models import CheckResult, Diagnostic, FileResult, Severity
from sharpcheck.rules.ops import CheckOps
from sharpcheck.rules.registry import Rule, RuleRegistry, registry

__all__ = [
    "CheckOps",
    "CheckResult",
    "Diagnostic",
    "FileResult",
    "Rule",
    "RuleRegistry",
    "Severity",
    "registry",
]
