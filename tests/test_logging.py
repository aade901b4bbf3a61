"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys

import pytest

from pursewise.config import BaseConfig
from pursewise.logging_config import JSONFormatter, get_logger, setup_logging


@pytest.fixture
def config(tmp_path, monkeypatch):
    monkeypatch.setenv("PURSEWISE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PURSEWISE_STORAGE_BACKEND", "memory")
    return BaseConfig()


def _record(**kwargs) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=kwargs.pop("level", logging.INFO),
        pathname="test.py",
        lineno=42,
        msg=kwargs.pop("msg", "Test message"),
        args=(),
        exc_info=kwargs.pop("exc_info", None),
    )
    record.module = "test_module"
    record.funcName = "test_function"
    for key, value in kwargs.items():
        setattr(record, key, value)
    return record


def test_json_formatter():
    """JSONFormatter emits the standard fields."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test.logger"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "extra" not in log_data


def test_json_formatter_with_exception():
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    log_data = json.loads(
        JSONFormatter().format(_record(level=logging.ERROR, msg="Error occurred", exc_info=exc_info))
    )

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"] is not None


def test_json_formatter_carries_extra_fields():
    log_data = json.loads(JSONFormatter().format(_record(user_id=7)))

    assert log_data["extra"] == {"user_id": 7}


def test_setup_logging(config, tmp_path):
    """Logging setup creates a rotating JSON log file."""
    config.DEV_MODE = True

    logger = setup_logging(config)

    assert logger.name == "pursewise"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 2  # Console + File

    log_file = tmp_path / "logs" / "pursewise.log"
    assert log_file.exists()

    get_logger("tests").warning("Test warning message", extra={"goal_id": 3})
    for handler in logger.handlers:
        handler.flush()

    lines = [line for line in log_file.read_text().splitlines() if line.strip()]
    entries = [json.loads(line) for line in lines]
    assert entries[0]["message"] == "Logging initialized"
    assert entries[-1]["extra"] == {"goal_id": 3}


def test_setup_logging_twice_does_not_duplicate_handlers(config):
    setup_logging(config)
    logger = setup_logging(config)

    assert len(logger.handlers) == 2


def test_get_logger():
    assert get_logger("module1").name == "pursewise.module1"
    assert get_logger("pursewise.services.aggregation").name == "pursewise.services.aggregation"
    assert get_logger("module1") is not get_logger("module2")


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(config, dev_mode):
    """Console logging level adjusts based on dev mode."""
    config.DEV_MODE = dev_mode

    logger = setup_logging(config)

    console_handler = next(
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.handlers.RotatingFileHandler)
    )
    expected_level = logging.INFO if dev_mode else logging.WARNING
    assert console_handler.level == expected_level


def test_json_formatter_skips_console_timestamp():
    """A console formatter running first must not leak ``asctime`` into the JSON extras."""
    record = _record(user_id=7)
    logging.Formatter("%(asctime)s %(message)s").format(record)

    log_data = json.loads(JSONFormatter().format(record))

    assert log_data["extra"] == {"user_id": 7}
