"""Cooperative cancellation for per-file analysis passes."""

from __future__ import annotations

import threading

from sharpcheck.core.errors import AnalysisCancelledError


class CancellationToken:
    """Flag checked at loop boundaries by the analyzers.

    A token may be shared by every file of one run; cancelling it aborts each
    pass at its next checkpoint.
    """

    __slots__ = ("_event",)

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancellation_requested(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise AnalysisCancelledError if cancel() has been called."""
        if self._event.is_set():
            raise AnalysisCancelledError.for_path()


class _NeverCancelled(CancellationToken):
    __slots__ = ()

    def cancel(self) -> None:
        raise RuntimeError("The NONE cancellation token cannot be cancelled")


NONE = _NeverCancelled()
"""Token that is never cancelled; the default for every analysis entry point."""
