"""Config module exports."""

from sharpcheck.config.loader import load_config
from sharpcheck.config.models import (
    AnalysisConfig,
    CallTargetConfig,
    CommentCodeConfig,
    ConsoleOutputConfig,
    LoggingConfig,
    SharpCheckConfig,
)

__all__ = [
    "load_config",
    "AnalysisConfig",
    "CallTargetConfig",
    "CommentCodeConfig",
    "ConsoleOutputConfig",
    "LoggingConfig",
    "SharpCheckConfig",
]
