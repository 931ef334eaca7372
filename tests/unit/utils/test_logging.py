"""Tests for structured logging setup."""

import logging
from pathlib import Path

import pytest
import structlog
from gitghost.utils.logging import LIBRARY_LOGGER, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_library_logger() -> logging.Logger:
    """Undo setup_logging so other tests see the silent default."""
    library_logger = logging.getLogger(LIBRARY_LOGGER)
    level, propagate = library_logger.level, library_logger.propagate

    yield library_logger

    for handler in list(library_logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            library_logger.removeHandler(handler)
            handler.close()
    library_logger.setLevel(level)
    library_logger.propagate = propagate
    structlog.reset_defaults()


def _file_handlers(library_logger: logging.Logger) -> list[logging.FileHandler]:
    return [h for h in library_logger.handlers if isinstance(h, logging.FileHandler)]


class TestLogging:
    """Tests for logging helpers."""

    def test_silent_without_setup(
        self, capsys: pytest.CaptureFixture[str], restore_library_logger: logging.Logger
    ) -> None:
        """Test events at every level are dropped until setup_logging is called."""
        logger = get_logger("gitghost.tests")

        logger.debug("debug_event")
        logger.info("info_event")
        logger.error("error_event", detail="boom")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""
        assert any(isinstance(h, logging.NullHandler) for h in restore_library_logger.handlers)

    def test_get_logger_is_under_library_logger(self) -> None:
        """Test module loggers are children of the gitghost logger."""
        logger = get_logger("gitghost.adapters.git.repository")

        assert logger.bind()._logger.name == "gitghost.adapters.git.repository"
        assert get_logger().bind()._logger.name == LIBRARY_LOGGER

    def test_log_file_receives_events(
        self, tmp_path: Path, restore_library_logger: logging.Logger
    ) -> None:
        """Test a verbose setup writes events to the log file."""
        log_file = tmp_path / "logs" / "git-ghost.log"

        setup_logging(verbose=True, log_file=log_file)
        get_logger("gitghost.tests").info("artifact_stored", refspec="ghost")
        for handler in restore_library_logger.handlers:
            handler.flush()

        content = log_file.read_text()
        assert "artifact_stored" in content
        assert "refspec=ghost" in content

    def test_setup_twice_does_not_duplicate_handlers(
        self, tmp_path: Path, restore_library_logger: logging.Logger
    ) -> None:
        """Test reconfiguring replaces the previous handlers."""
        log_file = tmp_path / "git-ghost.log"

        setup_logging(verbose=True, log_file=log_file)
        setup_logging(verbose=True, log_file=log_file)
        get_logger("gitghost.tests").info("written_once")
        for handler in restore_library_logger.handlers:
            handler.flush()

        assert len(_file_handlers(restore_library_logger)) == 1
        stream_handlers = [
            h
            for h in restore_library_logger.handlers
            if type(h) is logging.StreamHandler
        ]
        assert len(stream_handlers) == 1
        assert log_file.read_text().count("written_once") == 1

    def test_setup_without_file_drops_previous_file_handler(
        self, tmp_path: Path, restore_library_logger: logging.Logger
    ) -> None:
        """Test a later setup without a log file detaches the earlier one."""
        setup_logging(verbose=True, log_file=tmp_path / "git-ghost.log")
        setup_logging(verbose=False)

        assert _file_handlers(restore_library_logger) == []
        assert restore_library_logger.level == logging.CRITICAL
