"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (SHARPCHECK__SECTION__KEY)
3. Repo YAML (.sharpcheck.yaml)
4. Global YAML (~/.config/sharpcheck/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    SHARPCHECK__<SECTION>__<KEY>=<VALUE>

Examples:
    SHARPCHECK__LOGGING__LEVEL=DEBUG
    SHARPCHECK__ANALYSIS__MAX_WORKERS=4
    SHARPCHECK__COMMENT_CODE__BACKWARD_PROBE=every-anchor
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
BackwardProbe = Literal["first-anchor", "every-anchor"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        SHARPCHECK__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG logs every probe decision.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class AnalysisConfig(BaseModel):
    """Source discovery and scheduling.

    Env vars:
        SHARPCHECK__ANALYSIS__MAX_FILE_SIZE_KB: Skip files larger than this
        SHARPCHECK__ANALYSIS__MAX_WORKERS: Files analyzed in parallel
    """

    include_extensions: list[str] = Field(
        default_factory=lambda: [".cs"],
        description="File extensions picked up when walking directories.",
    )
    max_file_size_kb: int = Field(
        default=1024,
        description="Skip files larger than this (KB). Generated sources are usually huge.",
    )
    max_workers: int = Field(
        default=1,
        description="Files analyzed concurrently. Each worker owns its own parser.",
    )
    encoding: str = Field(
        default="utf-8",
        description="Source file encoding.",
    )

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_workers must be >= 1, got {v}")
        return v

    @field_validator("include_extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        return [ext if ext.startswith(".") else f".{ext}" for ext in (e.lower() for e in v)]


class CommentCodeConfig(BaseModel):
    """CommentCode rule settings.

    Env vars:
        SHARPCHECK__COMMENT_CODE__ENABLED: Enable/disable the rule
        SHARPCHECK__COMMENT_CODE__BACKWARD_PROBE: first-anchor or every-anchor
    """

    enabled: bool = True
    backward_probe: BackwardProbe = Field(
        default="first-anchor",
        description="Which anchors probe windows that end at them. "
        "every-anchor finds more merges at quadratic extra cost.",
    )
    max_window: int = Field(
        default=0,
        description="Longest run of comments joined into one probe. 0 = unbounded. "
        "TRADEOFF: Large files with many comments probe O(n^2) windows when unbounded.",
    )

    @field_validator("max_window")
    @classmethod
    def validate_max_window(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"max_window must be >= 0, got {v}")
        return v


class CallTargetConfig(BaseModel):
    """A console routine to report, e.g. System.Console.{WriteLine,Write}."""

    namespace: str = "System"
    type: str = "Console"
    members: list[str] = Field(default_factory=lambda: ["WriteLine", "Write"])

    @field_validator("namespace")
    @classmethod
    def validate_namespace(cls, v: str) -> str:
        if not v or any(not part for part in v.split(".")):
            raise ValueError(f"Namespace must be a dotted name, got {v!r}")
        return v


class ConsoleOutputConfig(BaseModel):
    """Logging rule settings.

    Env vars:
        SHARPCHECK__CONSOLE_OUTPUT__ENABLED: Enable/disable the rule
    """

    enabled: bool = True
    targets: list[CallTargetConfig] = Field(default_factory=lambda: [CallTargetConfig()])


class SharpCheckConfig(BaseModel):
    """Root configuration for SharpCheck."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    comment_code: CommentCodeConfig = Field(default_factory=CommentCodeConfig)
    console_output: ConsoleOutputConfig = Field(default_factory=ConsoleOutputConfig)
