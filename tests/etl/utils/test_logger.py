"""Unit tests for run logger setup."""

import logging
import sys
from datetime import date
from pathlib import Path

from boxdstats.etl.utils.logger import (
    _LOGGERS_CACHE,
    _build_handlers,
    log_file_path,
    setup_logger,
    silence_http_loggers,
)


def _close(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        handler.close()


class TestSetupLogger:
    @staticmethod
    def test_console_and_file_handlers(tmp_path: Path) -> None:
        logger = setup_logger("test.logger.handlers", log_dir=tmp_path)
        kinds = {type(handler) for handler in logger.handlers}
        assert kinds == {logging.StreamHandler, logging.FileHandler}
        assert logger.propagate is False
        _close(logger)

    @staticmethod
    def test_level_by_name(tmp_path: Path) -> None:
        logger = setup_logger("test.logger.level", level="DEBUG", log_dir=tmp_path)
        assert logger.level == logging.DEBUG
        assert all(handler.level == logging.DEBUG for handler in logger.handlers)
        _close(logger)

    @staticmethod
    def test_default_level_from_settings(tmp_path: Path) -> None:
        logger = setup_logger("test.logger.default", log_dir=tmp_path)
        assert logger.level == logging.INFO
        _close(logger)

    @staticmethod
    def test_cached_per_name(tmp_path: Path) -> None:
        first = setup_logger("test.logger.cached", log_dir=tmp_path)
        second = setup_logger("test.logger.cached", level="ERROR", log_dir=tmp_path)
        assert first is second
        assert first.level == logging.INFO
        assert "test.logger.cached" in _LOGGERS_CACHE
        _close(first)

    @staticmethod
    def test_writes_to_dated_file(tmp_path: Path) -> None:
        logger = setup_logger("test.logger.file", log_dir=tmp_path)
        logger.info("report built")
        _close(logger)

        content = log_file_path("test.logger.file", tmp_path).read_text(encoding="utf-8")
        assert "report built" in content
        assert "| INFO     | test.logger.file |" in content


class TestHandlers:
    @staticmethod
    def test_console_on_stderr(tmp_path: Path) -> None:
        handlers = _build_handlers("test", tmp_path)
        assert handlers[0].stream is sys.stderr
        for handler in handlers:
            handler.close()

    @staticmethod
    def test_unwritable_dir_keeps_console_only(tmp_path: Path) -> None:
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("file")
        handlers = _build_handlers("test", blocker / "logs")
        assert [type(h) for h in handlers] == [logging.StreamHandler]


class TestLogFilePath:
    @staticmethod
    def test_name_sanitized_and_dated(tmp_path: Path) -> None:
        path = log_file_path("boxdstats.pipeline", tmp_path, day=date(2024, 3, 9))
        assert path == tmp_path / "boxdstats_pipeline_20240309.log"

    @staticmethod
    def test_creates_directory(tmp_path: Path) -> None:
        log_dir = tmp_path / "nested" / "logs"
        log_file_path("x", log_dir)
        assert log_dir.is_dir()

    @staticmethod
    def test_defaults_to_settings_dir(tmp_path: Path) -> None:
        assert log_file_path("x").parent == tmp_path / "logs"


class TestSilenceHttpLoggers:
    @staticmethod
    def test_http_loggers_raised() -> None:
        silence_http_loggers()
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING
