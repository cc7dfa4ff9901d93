"""Window merge detection over consecutive comments.

Single comment lines are often fragments (``void Test()``, ``{``, ``}``) that
only parse once joined with their neighbours. The detector scans the comments
of a file in order and, around each position, probes joined windows until it
finds one that parses.

Scan, for each position ``i``:

1. ``i`` alone is probed; success marks ``i`` and makes it an anchor.
2. Forward windows ``[i, e]`` are probed from the longest (``e`` = largest
   unclassified index) down to ``[i, i+1]``; the first success marks the
   whole window.
3. Backward windows ``[s, i]`` are probed longest first, for the first anchor
   only (or every anchor when configured); the first success marks the window.
4. The scan resumes at the smallest unclassified index after ``i``.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Callable, Iterator, Sequence
from typing import Literal

from sharpcheck.core.cancellation import NONE, CancellationToken
from sharpcheck.core.logging import get_logger

log = get_logger("analysis.merge")


class IntervalSet:
    """Sorted, disjoint, inclusive integer intervals.

    Adjacent and overlapping ranges are coalesced on insert, so every stored
    interval is a maximal contiguous run.
    """

    def __init__(self) -> None:
        self._starts: list[int] = []
        self._ends: list[int] = []

    def add(self, index: int) -> None:
        self.add_range(index, index)

    def add_range(self, start: int, end: int) -> None:
        if end < start:
            raise ValueError(f"Empty range [{start}, {end}]")
        # First interval that could touch [start, end] (ends at or after start - 1)
        lo = bisect_right(self._ends, start - 2)
        # One past the last interval that could touch (starts at or before end + 1)
        hi = bisect_right(self._starts, end + 1)
        if lo < hi:
            start = min(start, self._starts[lo])
            end = max(end, self._ends[hi - 1])
        self._starts[lo:hi] = [start]
        self._ends[lo:hi] = [end]

    def __contains__(self, index: object) -> bool:
        if not isinstance(index, int):
            return False
        pos = bisect_right(self._starts, index) - 1
        return pos >= 0 and index <= self._ends[pos]

    def __iter__(self) -> Iterator[int]:
        for start, end in zip(self._starts, self._ends, strict=True):
            yield from range(start, end + 1)

    def __len__(self) -> int:
        return sum(end - start + 1 for start, end in zip(self._starts, self._ends, strict=True))

    def __bool__(self) -> bool:
        return bool(self._starts)

    @property
    def intervals(self) -> list[tuple[int, int]]:
        return list(zip(self._starts, self._ends, strict=True))

    def next_gap(self, after: int, limit: int) -> int | None:
        """Smallest index in ``(after, limit)`` not in the set."""
        candidate = after + 1
        pos = bisect_right(self._starts, candidate) - 1
        if pos >= 0 and candidate <= self._ends[pos]:
            candidate = self._ends[pos] + 1
        return candidate if candidate < limit else None

    def last_gap(self, limit: int) -> int | None:
        """Largest index in ``[0, limit)`` not in the set."""
        candidate = limit - 1
        pos = bisect_right(self._starts, candidate) - 1
        if pos >= 0 and candidate <= self._ends[pos]:
            candidate = self._starts[pos] - 1
        return candidate if candidate >= 0 else None


BackwardProbe = Literal["first-anchor", "every-anchor"]


class WindowMergeDetector:
    """Finds the comment indices that belong to a code-containing run."""

    def __init__(
        self,
        is_code: Callable[[str], bool],
        *,
        backward_probe: BackwardProbe = "first-anchor",
        max_window: int = 0,
    ) -> None:
        self._is_code = is_code
        self._backward_probe = backward_probe
        self._max_window = max_window  # 0 = unbounded

    def detect(
        self,
        comments: Sequence[str],
        cancellation: CancellationToken = NONE,
    ) -> list[int]:
        """Return ascending indices of comments judged to be code.

        Windows are runs of comment indices, not of source text: code lying
        between two comments does not keep them from being joined.
        """
        count = len(comments)
        classified = IntervalSet()
        seen_anchor = False
        i: int | None = 0 if count else None

        while i is not None:
            anchor = self._probe(comments[i], cancellation)
            if anchor:
                classified.add(i)

            upper = classified.last_gap(count)
            if upper is not None:
                self._extend_forward(comments, i, upper, classified, cancellation)

            if anchor and (not seen_anchor or self._backward_probe == "every-anchor"):
                self._extend_backward(comments, i, classified, cancellation)
            seen_anchor = seen_anchor or anchor

            i = classified.next_gap(i, count)

        result = list(classified)
        log.debug("merge_detected", comments=count, flagged=len(result), runs=classified.intervals)
        return result

    def _probe(self, text: str, cancellation: CancellationToken) -> bool:
        cancellation.raise_if_cancelled()
        return self._is_code(text)

    def _extend_forward(
        self,
        comments: Sequence[str],
        start: int,
        upper: int,
        classified: IntervalSet,
        cancellation: CancellationToken,
    ) -> None:
        if self._max_window:
            upper = min(upper, start + self._max_window - 1)
        for end in range(upper, start, -1):
            if self._probe("\n".join(comments[start : end + 1]), cancellation):
                classified.add_range(start, end)
                return

    def _extend_backward(
        self,
        comments: Sequence[str],
        end: int,
        classified: IntervalSet,
        cancellation: CancellationToken,
    ) -> None:
        lower = max(0, end - self._max_window + 1) if self._max_window else 0
        for start in range(lower, end):
            if self._probe("\n".join(comments[start : end + 1]), cancellation):
                classified.add_range(start, end)
                return
