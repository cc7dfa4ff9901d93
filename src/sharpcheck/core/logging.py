"""Structured logging for check and fix runs.

Records are routed through stdlib handlers built from ``LoggingConfig``.
Every record of an invocation carries its ``run_id``, and records emitted
while a file is analyzed carry that file's ``path``. Both live in
structlog's context variables, so worker threads need the caller's context
copied in (see ``CheckOps._map``).

Module-level loggers are lazy proxies: they resolve against whatever
``configure_logging`` installed at the time of the call, not at import.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from sharpcheck.config.models import LoggingConfig, LogOutputConfig

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def set_run_id(run_id: str | None = None) -> str:
    """Tag the records of this invocation with a run ID (generated if omitted)."""
    rid = run_id or uuid4().hex[:12]
    structlog.contextvars.bind_contextvars(run_id=rid)
    return rid


@contextmanager
def file_context(path: str) -> Iterator[None]:
    """Tag records logged inside the block with the file being analyzed."""
    with structlog.contextvars.bound_contextvars(path=path):
        yield


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "WARNING",
) -> None:
    """Install handlers for every configured output.

    ``config`` wins over the simple ``json_format``/``level`` pair, which
    only describes a single stderr output. Safe to call repeatedly; the
    previous handlers are replaced.
    """
    from sharpcheck.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level.upper(),  # type: ignore[arg-type]
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    root_level = logging.getLevelNamesMapping()[config.level]
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt=_TIMESTAMP_FORMAT, key="timestamp"),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Proxies are re-resolved on each call so reconfiguration takes effect
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(root_level)
    for output in config.outputs:
        root.addHandler(_handler_for(output, config.level, pre_chain))


def _handler_for(
    output: LogOutputConfig,
    default_level: str,
    pre_chain: list[structlog.types.Processor],
) -> logging.Handler:
    handler: logging.Handler
    if output.destination in ("stderr", "stdout"):
        stream = sys.stderr if output.destination == "stderr" else sys.stdout
        handler = logging.StreamHandler(stream)
        colors = stream.isatty()
    else:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        colors = False

    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=colors, pad_event_to=0, pad_level=False)

    handler.setLevel(logging.getLevelNamesMapping()[output.level or default_level])
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain))
    return handler


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a lazy logger; ``name`` is recorded as the ``logger`` key."""
    if name:
        return structlog.get_logger(logger=name)  # type: ignore[no-any-return]
    return structlog.get_logger()  # type: ignore[no-any-return]
