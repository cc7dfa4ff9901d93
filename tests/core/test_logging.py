"""Tests for structured logging."""

import json
import logging
import threading
from pathlib import Path

import pytest
import structlog

from sharpcheck.config.models import LoggingConfig, LogOutputConfig
from sharpcheck.core.logging import configure_logging, file_context, get_logger, set_run_id


def _json_file_config(path: Path, level: str = "INFO") -> LoggingConfig:
    return LoggingConfig(level=level, outputs=[LogOutputConfig(format="json", destination=str(path))])


def _records(path: Path) -> list[dict[str, object]]:
    return [json.loads(line) for line in path.read_text().splitlines() if line]


class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        structlog.contextvars.clear_contextvars()
        logging.getLogger().handlers.clear()

    def test_given_json_format_when_log_then_valid_json_on_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """JSON format produces valid JSON with required fields, never on stdout."""
        # Given
        configure_logging(json_format=True, level="INFO")
        logger = get_logger("test")

        # When
        logger.info("test message", key="value")

        # Then
        captured = capsys.readouterr()
        assert captured.out == ""
        data = json.loads(captured.err.strip().splitlines()[-1])
        assert data["event"] == "test message"
        assert data["key"] == "value"
        assert data["logger"] == "test"
        assert "timestamp" in data
        assert data["level"] == "info"

    def test_given_logger_created_before_configure_when_log_then_configuration_applies(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Module-level loggers pick up configuration installed after import."""
        # Given
        logger = get_logger("analysis.merge")
        log_file = tmp_path / "late.log"

        # When
        configure_logging(config=_json_file_config(log_file, level="WARNING"))
        logger.debug("merge_detected")
        logger.warning("file_failed")

        # Then
        assert capsys.readouterr().out == ""
        records = _records(log_file)
        assert [r["event"] for r in records] == ["file_failed"]
        assert records[0]["logger"] == "analysis.merge"

    def test_given_config_object_when_configure_then_takes_precedence(self, tmp_path: Path) -> None:
        """LoggingConfig object takes precedence over simple params."""
        # Given
        log_file = tmp_path / "test.log"

        # When - config's DEBUG should override the level="ERROR" param
        configure_logging(config=_json_file_config(log_file, level="DEBUG"), json_format=False, level="ERROR")
        get_logger().debug("debug msg")

        # Then
        assert "debug msg" in log_file.read_text()

    def test_given_run_id_when_log_then_record_carries_it(self, tmp_path: Path) -> None:
        """Every record of a run is tagged with the run ID."""
        # Given
        log_file = tmp_path / "run.log"
        configure_logging(config=_json_file_config(log_file))
        set_run_id("run-42")

        # When
        get_logger("rules.ops").info("fix_applied")

        # Then
        assert _records(log_file)[-1]["run_id"] == "run-42"

    def test_given_no_run_id_when_set_then_generates_short_hex(self) -> None:
        rid = set_run_id()

        assert len(rid) == 12
        assert structlog.contextvars.get_contextvars()["run_id"] == rid

    def test_given_file_context_when_log_then_path_only_inside_block(self, tmp_path: Path) -> None:
        """Records inside the block carry the file path; later ones do not."""
        # Given
        log_file = tmp_path / "files.log"
        configure_logging(config=_json_file_config(log_file))
        logger = get_logger("rules.ops")

        # When
        with file_context("src/Program.cs"):
            logger.info("fix_applied")
        logger.info("done")

        # Then
        inside, after = _records(log_file)
        assert inside["path"] == "src/Program.cs"
        assert "path" not in after

    def test_given_file_context_in_threads_when_log_then_paths_do_not_leak(self, tmp_path: Path) -> None:
        """Each worker thread sees only its own file path."""
        # Given
        log_file = tmp_path / "threads.log"
        configure_logging(config=_json_file_config(log_file))
        logger = get_logger()

        def work(name: str) -> None:
            with file_context(name):
                logger.info("file_analyzed", name=name)

        # When
        threads = [threading.Thread(target=work, args=(f"F{i}.cs",)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        # Then
        records = _records(log_file)
        assert len(records) == 4
        assert all(r["path"] == r["name"] for r in records)

    def test_given_multi_output_config_when_configure_then_levels_apply(self, tmp_path: Path) -> None:
        """Multiple outputs receive logs according to their levels."""
        # Given
        debug_file = tmp_path / "debug.log"
        info_file = tmp_path / "info.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(format="json", destination=str(info_file), level="INFO"),
                LogOutputConfig(format="json", destination=str(debug_file)),
            ],
        )

        # When
        configure_logging(config=config)
        logger = get_logger()
        logger.debug("debug only")
        logger.info("info msg")

        # Then
        info_content = info_file.read_text()
        assert "info msg" in info_content
        assert "debug only" not in info_content
        debug_content = debug_file.read_text()
        assert "debug only" in debug_content
        assert "info msg" in debug_content

    def test_given_default_level_when_info_then_suppressed(self, tmp_path: Path) -> None:
        """The default WARNING level drops per-file INFO chatter."""
        log_file = tmp_path / "quiet.log"
        configure_logging(config=LoggingConfig(outputs=[LogOutputConfig(format="json", destination=str(log_file))]))

        logger = get_logger()
        logger.info("fix_applied")
        logger.warning("file_failed")

        content = log_file.read_text()
        assert "fix_applied" not in content
        assert "file_failed" in content

    def test_given_reconfigure_when_log_then_old_file_handler_closed(self, tmp_path: Path) -> None:
        first = tmp_path / "first.log"
        second = tmp_path / "second.log"
        configure_logging(config=_json_file_config(first))

        configure_logging(config=_json_file_config(second))
        get_logger().info("after")

        assert first.read_text() == ""
        assert "after" in second.read_text()
