"""Core module exports."""

from sharpcheck.core.cancellation import NONE, CancellationToken
from sharpcheck.core.errors import (
    AnalysisCancelledError,
    AnalysisError,
    ConfigError,
    ErrorCode,
    InternalError,
    SharpCheckError,
)
from sharpcheck.core.logging import configure_logging, file_context, get_logger, set_run_id

__all__ = [
    # Cancellation
    "CancellationToken",
    "NONE",
    # Errors
    "AnalysisCancelledError",
    "AnalysisError",
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "SharpCheckError",
    # Logging
    "configure_logging",
    "file_context",
    "get_logger",
    "set_run_id",
]
