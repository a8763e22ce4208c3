"""
Unit tests for the hexmaze logging utilities.
"""

import logging

import pytest

from hexmaze.config import MazeConfig
from hexmaze.utils.maze_logging import (
    LoggedOperation,
    MazeFormatter,
    MazeLogger,
    configure_logging,
    get_logger,
    log_maze_configuration,
    log_maze_summary,
)


@pytest.fixture
def captured(capsys):
    """Configure INFO logging without colors and return the capsys fixture."""
    configure_logging(level="INFO", use_colors=False)
    return capsys


def test_get_logger_is_cached():
    assert get_logger("hexmaze.test_cache") is get_logger("hexmaze.test_cache")


def test_get_logger_defaults_to_caller_module():
    assert get_logger().name == __name__


def test_singleton():
    assert MazeLogger() is MazeLogger()


def test_single_console_handler_after_reconfigure():
    logger = get_logger("hexmaze.test_handlers")
    configure_logging(level="DEBUG", use_colors=False)
    configure_logging(level="INFO", use_colors=False)
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO
    assert logger.propagate is False


def test_console_output_goes_to_stderr(captured):
    get_logger("hexmaze.test_stream").info("carving")
    out, err = captured.readouterr()
    assert out == ""
    assert "carving" in err
    assert "INFO" in err


def test_warning_level_hides_info(capsys):
    configure_logging(level="WARNING", use_colors=False)
    get_logger("hexmaze.test_quiet").info("hidden")
    assert "hidden" not in capsys.readouterr().err


def test_log_to_file(tmp_path):
    log_file = tmp_path / "logs" / "maze.log"
    configure_logging(level="INFO", log_to_file=True, log_file_path=log_file, use_colors=False)
    logger = get_logger("hexmaze.test_file")
    logger.info("to file")
    for handler in logger.handlers:
        handler.flush()
    assert "to file" in log_file.read_text()


def test_formatter_location():
    formatter = MazeFormatter(use_colors=False, include_location=True)
    record = logging.LogRecord("hexmaze", logging.INFO, "/x/carve.py", 12, "msg", None, None)
    assert "[carve.py:12]" in formatter.format(record)


def test_colored_formatter():
    formatter = MazeFormatter(use_colors=True)
    record = logging.LogRecord("hexmaze", logging.ERROR, "/x/carve.py", 12, "broken", None, None)
    formatted = formatter.format(record)
    assert "broken" in formatted
    assert "ERROR" in formatted


def test_logged_operation_records_duration(captured):
    logger = get_logger("hexmaze.test_op")
    with LoggedOperation(logger, "carving maze") as op:
        pass
    assert op.duration is not None and op.duration >= 0
    err = captured.readouterr().err
    assert "Starting carving maze" in err
    assert "Completed carving maze" in err


def test_logged_operation_reports_failure(captured):
    logger = get_logger("hexmaze.test_op_fail")
    with pytest.raises(ValueError), LoggedOperation(logger, "analysing tree"):
        raise ValueError("bad tree")
    assert "Failed analysing tree" in captured.readouterr().err


def test_log_maze_configuration(captured):
    log_maze_configuration(get_logger("hexmaze.test_cfg"), MazeConfig(columns=3, rows=4, seed=9), {"source": "test"})
    err = captured.readouterr().err
    assert "columns: 3" in err
    assert "seed: 9" in err
    assert "source: test" in err


def test_log_maze_summary(captured, small_maze):
    log_maze_summary(get_logger("hexmaze.test_summary"), small_maze)
    err = captured.readouterr().err
    assert "29/" in err
    assert f"weighted length={small_maze.path_length}" in err


def test_colors_off_when_stderr_is_not_a_terminal(capsys):
    configure_logging(level="INFO")
    get_logger("hexmaze.test_plain").info("plain text")
    err = capsys.readouterr().err
    assert "plain text" in err
    assert "\x1b[" not in err
