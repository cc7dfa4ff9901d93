"""Rule models - diagnostics and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal

from sharpcheck.syntax.tree import TextSpan

if TYPE_CHECKING:
    from sharpcheck.syntax.parser import SyntaxTree


class Severity(Enum):
    """Diagnostic severity level."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HINT = "hint"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding of one rule in one file.

    ``span`` is a byte range in the analyzed source; line and column are
    1-based, columns counted in characters.
    """

    rule_id: str
    message: str
    path: str
    span: TextSpan
    line: int
    column: int
    end_line: int
    end_column: int
    severity: Severity = Severity.WARNING
    category: str = ""
    fixable: bool = False

    @classmethod
    def at(
        cls,
        tree: SyntaxTree,
        span: TextSpan,
        *,
        rule_id: str,
        message: str,
        category: str = "",
        severity: Severity = Severity.WARNING,
        fixable: bool = False,
    ) -> Diagnostic:
        """Build a diagnostic for ``span`` of ``tree``, filling in line/column."""
        line, column = tree.line_column(span.start)
        end_line, end_column = tree.line_column(span.end)
        return cls(
            rule_id=rule_id,
            message=message,
            path=tree.path,
            span=span,
            line=line,
            column=column,
            end_line=end_line,
            end_column=end_column,
            severity=severity,
            category=category,
            fixable=fixable,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "severity": self.severity.value,
            "category": self.category,
            "message": self.message,
            "path": self.path,
            "line": self.line,
            "column": self.column,
            "end_line": self.end_line,
            "end_column": self.end_column,
            "span": [self.span.start, self.span.end],
            "fixable": self.fixable,
        }


@dataclass
class FileResult:
    """Result from analyzing (or fixing) a single file."""

    path: str
    status: Literal["clean", "dirty", "error", "skipped"]
    diagnostics: list[Diagnostic] = field(default_factory=list)
    error_detail: str | None = None  # If status is "error" or "skipped"
    modified: bool = False  # When fix applied (or would be, in dry-run)
    diff: str | None = None  # For dry_run mode

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "path": self.path,
            "status": self.status,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
        if self.error_detail is not None:
            data["error_detail"] = self.error_detail
        if self.modified:
            data["modified"] = True
        return data


@dataclass
class CheckResult:
    """Aggregated result of a check or fix run."""

    action: Literal["check", "fix"]
    dry_run: bool = False
    files: list[FileResult] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [d for f in self.files for d in f.diagnostics]

    @property
    def total_diagnostics(self) -> int:
        return sum(len(f.diagnostics) for f in self.files)

    @property
    def files_checked(self) -> int:
        return sum(1 for f in self.files if f.status in ("clean", "dirty"))

    @property
    def files_modified(self) -> int:
        return sum(1 for f in self.files if f.modified)

    @property
    def status(self) -> Literal["clean", "dirty", "error"]:
        if any(f.status == "error" for f in self.files):
            return "error"
        if any(f.status == "dirty" for f in self.files):
            return "dirty"
        return "clean"

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.action,
            "dry_run": self.dry_run,
            "status": self.status,
            "total_diagnostics": self.total_diagnostics,
            "files_checked": self.files_checked,
            "files_modified": self.files_modified,
            "duration_seconds": round(self.duration_seconds, 3),
            "files": [f.to_dict() for f in self.files],
        }
