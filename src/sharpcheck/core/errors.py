"""SharpCheck error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Analysis
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Analysis (3xxx)
    ANALYSIS_CANCELLED = 3001
    ANALYSIS_UNREADABLE_FILE = 3002
    ANALYSIS_GRAMMAR_UNAVAILABLE = 3003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class SharpCheckError(Exception):
    """Base error with structured context for JSON output."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(SharpCheckError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class AnalysisError(SharpCheckError):
    """Errors raised while analyzing a single source file."""

    @classmethod
    def unreadable_file(cls, path: str, reason: str) -> "AnalysisError":
        return cls(
            code=ErrorCode.ANALYSIS_UNREADABLE_FILE,
            message=f"Cannot read {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def grammar_unavailable(cls, package: str) -> "AnalysisError":
        return cls(
            code=ErrorCode.ANALYSIS_GRAMMAR_UNAVAILABLE,
            message=f"Grammar package not installed: {package}",
            details={"package": package},
        )


class AnalysisCancelledError(SharpCheckError):
    """Raised when a cancellation token fires during a file's analysis pass.

    Not a fault: hosts cancel long-running passes on timeouts. The pass is
    abandoned without reporting partial diagnostics.
    """

    @classmethod
    def for_path(cls, path: str | None = None) -> "AnalysisCancelledError":
        return cls(
            code=ErrorCode.ANALYSIS_CANCELLED,
            message="Analysis cancelled" if path is None else f"Analysis of {path} cancelled",
            retryable=True,
            details={"path": path} if path is not None else {},
        )


class InternalError(SharpCheckError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
