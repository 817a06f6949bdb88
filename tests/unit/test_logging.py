"""Unit tests for logging configuration."""

import json

from safe_pattern.utils.logging import close_log_files, configure_logging, get_logger


def test_file_logging_writes_json_lines(tmp_path) -> None:
    """Test that file logging renders one JSON object per event."""
    log_file = tmp_path / "app.log"
    configure_logging(str(log_file))
    get_logger(__name__).info("pattern_checked", pattern="^a$", safe=True)
    close_log_files()

    record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])
    assert record["event"] == "pattern_checked"
    assert record["level"] == "info"
    assert record["safe"] is True


def test_reconfiguring_reuses_file_handle(tmp_path) -> None:
    """Test that repeated configuration does not open the file again."""
    from safe_pattern.utils import logging as logging_utils

    log_file = str(tmp_path / "app.log")
    configure_logging(log_file)
    first = logging_utils._log_files[log_file]
    configure_logging(log_file, verbose=True)

    assert logging_utils._log_files[log_file] is first
    assert len(logging_utils._log_files) == 1


def test_close_log_files(tmp_path) -> None:
    """Test that open log files are closed and forgotten."""
    from safe_pattern.utils import logging as logging_utils

    configure_logging(str(tmp_path / "a.log"))
    configure_logging(str(tmp_path / "b.log"))
    handles = list(logging_utils._log_files.values())
    assert len(handles) == 2

    close_log_files()

    assert logging_utils._log_files == {}
    assert all(handle.closed for handle in handles)
