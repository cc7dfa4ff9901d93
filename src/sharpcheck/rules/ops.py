"""Rule operations - check and fix."""

from __future__ import annotations

import contextvars
import difflib
import os
import time
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TypeVar

from sharpcheck.config.constants import MAX_FIX_ROUNDS
from sharpcheck.config.models import SharpCheckConfig
from sharpcheck.core.cancellation import NONE, CancellationToken
from sharpcheck.core.errors import AnalysisCancelledError, AnalysisError, InternalError, SharpCheckError
from sharpcheck.core.excludes import is_prunable_dir
from sharpcheck.core.logging import file_context, get_logger
from sharpcheck.core.progress import progress
from sharpcheck.rules.models import CheckResult, Diagnostic, FileResult
from sharpcheck.rules.registry import Rule, RuleRegistry, registry
from sharpcheck.syntax.parser import get_parser

log = get_logger("rules.ops")

_T = TypeVar("_T")


class CheckOps:
    """Check and fix operations over C# sources.

    Each file is analyzed independently. With ``analysis.max_workers`` > 1
    files are spread over a thread pool; every worker thread uses its own
    tree-sitter parser.
    """

    def __init__(
        self,
        config: SharpCheckConfig | None = None,
        *,
        rules: RuleRegistry | None = None,
        cancellation: CancellationToken = NONE,
    ) -> None:
        self._config = config or SharpCheckConfig()
        self._registry = rules or registry
        self._cancellation = cancellation

    @property
    def config(self) -> SharpCheckConfig:
        return self._config

    # =========================================================================
    # Discovery
    # =========================================================================

    def discover(self, paths: Iterable[Path | str]) -> list[Path]:
        """Expand files and directories into the sorted list of sources to analyze.

        Explicit files are always kept; directories are walked with pruning
        and filtered by extension.
        """
        extensions = tuple(self._config.analysis.include_extensions)
        found: set[Path] = set()
        for raw in paths:
            path = Path(raw)
            if path.is_file():
                found.add(path)
                continue
            if not path.is_dir():
                raise FileNotFoundError(f"No such file or directory: {path}")
            for dirpath, dirnames, filenames in os.walk(path):
                dirnames[:] = [d for d in dirnames if not is_prunable_dir(d)]
                for filename in filenames:
                    if filename.lower().endswith(extensions):
                        found.add(Path(dirpath) / filename)
        return sorted(found)

    # =========================================================================
    # Check
    # =========================================================================

    def check_source(
        self,
        source: str,
        path: str = "<memory>",
        *,
        rule_ids: Sequence[str] | None = None,
    ) -> list[Diagnostic]:
        """Analyze one in-memory source with every enabled rule."""
        tree = get_parser().parse(source, path)
        diagnostics: list[Diagnostic] = []
        for rule in self._rules(rule_ids):
            diagnostics.extend(rule.create_analyzer(self._config).analyze(tree, self._cancellation))
        diagnostics.sort(key=lambda d: (d.span.start, d.rule_id))
        return diagnostics

    def check_file(self, path: Path | str, *, rule_ids: Sequence[str] | None = None) -> FileResult:
        """Analyze a single file.

        Unreadable files and analyzer faults give an ``error`` result so the
        rest of the run carries on; cancellation propagates.
        """
        path = Path(path)
        with file_context(str(path)):
            skipped = self._skip_reason(path)
            if skipped is not None:
                log.info("file_skipped", reason=skipped)
                return FileResult(path=str(path), status="skipped", error_detail=skipped)
            try:
                source = self._read(path)
                diagnostics = self.check_source(source, str(path), rule_ids=rule_ids)
            except AnalysisCancelledError:
                raise
            except AnalysisError as e:
                return _failed(path, e)
            except Exception as e:
                return _failed(path, InternalError.unexpected(f"{type(e).__name__}: {e}", path=str(path)))
            log.debug("file_analyzed", diagnostics=len(diagnostics))
            return FileResult(
                path=str(path),
                status="dirty" if diagnostics else "clean",
                diagnostics=diagnostics,
            )

    def check(self, paths: Iterable[Path | str], *, rule_ids: Sequence[str] | None = None) -> CheckResult:
        """Analyze files and directories.

        Raises:
            AnalysisCancelledError: If the cancellation token fires; no
                partial result is returned.
            KeyError: If ``rule_ids`` names an unknown rule.
        """
        start_time = time.time()
        self._rules(rule_ids)
        files = self.discover(paths)
        results = self._map(lambda p: self.check_file(p, rule_ids=rule_ids), files)
        return CheckResult(action="check", files=results, duration_seconds=time.time() - start_time)

    # =========================================================================
    # Fix
    # =========================================================================

    def fix_source(self, source: str, path: str = "<memory>") -> str:
        """Apply every available code fix to ``source`` and return the new text.

        Fixes of one round are applied together; the result is re-analyzed
        until no fixable diagnostic is left or ``MAX_FIX_ROUNDS`` is reached.
        """
        parser = get_parser()
        current = source
        for rule in self._rules(None):
            if not rule.fixable:
                continue
            analyzer = rule.create_analyzer(self._config)
            for _ in range(MAX_FIX_ROUNDS):
                tree = parser.parse(current, path)
                fixable = [d for d in analyzer.analyze(tree, self._cancellation) if d.fixable]
                if not fixable:
                    break
                updated = analyzer.fix(tree, fixable).to_source()  # type: ignore[attr-defined]
                if updated == current:
                    break
                current = updated
        return current

    def fix_file(self, path: Path | str, *, dry_run: bool = False) -> FileResult:
        path = Path(path)
        with file_context(str(path)):
            skipped = self._skip_reason(path)
            if skipped is not None:
                log.info("file_skipped", reason=skipped)
                return FileResult(path=str(path), status="skipped", error_detail=skipped)
            try:
                return self._fix_readable_file(path, dry_run)
            except AnalysisCancelledError:
                raise
            except AnalysisError as e:
                return _failed(path, e)
            except Exception as e:
                return _failed(path, InternalError.unexpected(f"{type(e).__name__}: {e}", path=str(path)))

    def _fix_readable_file(self, path: Path, dry_run: bool) -> FileResult:
        source = self._read(path)
        fixed = self.fix_source(source, str(path))
        remaining = self.check_source(fixed, str(path))

        modified = fixed != source
        diff: str | None = None
        if modified:
            if dry_run:
                diff = _unified_diff(source, fixed, str(path))
            else:
                path.write_text(fixed, encoding=self._config.analysis.encoding, newline="")
            log.info("fix_applied", dry_run=dry_run)
        return FileResult(
            path=str(path),
            status="dirty" if remaining else "clean",
            diagnostics=remaining,
            modified=modified,
            diff=diff,
        )

    def fix(self, paths: Iterable[Path | str], *, dry_run: bool = False) -> CheckResult:
        """Apply code fixes to files and directories (preview only with ``dry_run``)."""
        start_time = time.time()
        files = self.discover(paths)
        results = self._map(lambda p: self.fix_file(p, dry_run=dry_run), files)
        return CheckResult(
            action="fix",
            dry_run=dry_run,
            files=results,
            duration_seconds=time.time() - start_time,
        )

    # =========================================================================
    # Internals
    # =========================================================================

    def _rules(self, rule_ids: Sequence[str] | None) -> list[Rule]:
        if rule_ids is not None:
            unknown = [rid for rid in rule_ids if self._registry.get(rid) is None]
            if unknown:
                raise KeyError(f"Unknown rule(s): {', '.join(unknown)}")
        return self._registry.enabled(self._config, rule_ids)

    def _skip_reason(self, path: Path) -> str | None:
        try:
            size_kb = path.stat().st_size / 1024
        except OSError:
            return None  # Surfaces as unreadable on read
        limit = self._config.analysis.max_file_size_kb
        if size_kb > limit:
            return f"File larger than {limit} KB"
        return None

    def _read(self, path: Path) -> str:
        try:
            # newline="" keeps \r\n intact so fixes preserve line endings
            with path.open(encoding=self._config.analysis.encoding, newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise AnalysisError.unreadable_file(str(path), str(e)) from e

    def _map(self, fn: Callable[[Path], _T], files: list[Path]) -> list[_T]:
        """Run ``fn`` over ``files`` in input order, concurrently if configured."""
        workers = min(self._config.analysis.max_workers, len(files))
        try:
            if workers <= 1:
                return [fn(path) for path in progress(files, desc="Analyzing")]
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="sharpcheck") as executor:
                # Each task gets a copy of the caller's context so run_id reaches worker logs
                futures = [executor.submit(contextvars.copy_context().run, fn, path) for path in files]
                try:
                    return [future.result() for future in progress(futures, desc="Analyzing")]
                except AnalysisCancelledError:
                    executor.shutdown(wait=True, cancel_futures=True)
                    raise
        except AnalysisCancelledError:
            log.warning("analysis_cancelled", files=len(files))
            raise


def _failed(path: Path, error: SharpCheckError) -> FileResult:
    log.warning("file_failed", error=error.message, code=error.code.name)
    return FileResult(path=str(path), status="error", error_detail=error.message)


def _unified_diff(before: str, after: str, path: str) -> str:
    return "".join(
        difflib.unified_diff(
            before.splitlines(keepends=True),
            after.splitlines(keepends=True),
            fromfile=f"a/{path}",
            tofile=f"b/{path}",
        )
    )
