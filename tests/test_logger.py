"""Test the logging sink."""
import json
import logging
from logging.handlers import QueueHandler

import pytest

from calculator_microservice.common.logger import configure_logging, shutdown_logging


@pytest.fixture
def target() -> logging.Logger:
    """Fresh logger, isolated from the service logger."""
    logger = logging.getLogger("tests.logger")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True


def test_files_split_by_level(tmp_path, target) -> None:
    """error.log only holds errors, combined.log holds every record."""
    listener = configure_logging(tmp_path, service_name="calc-test", target=target)
    target.info("Addition operation: 1.0 + 2.0 = 3.0")
    target.error("Division by zero attempt")
    shutdown_logging(listener, target=target)

    combined = [json.loads(line) for line in (tmp_path / "combined.log").read_text(encoding="utf-8").splitlines()]
    errors = [json.loads(line) for line in (tmp_path / "error.log").read_text(encoding="utf-8").splitlines()]

    assert [entry["message"] for entry in combined] == [
        "Addition operation: 1.0 + 2.0 = 3.0",
        "Division by zero attempt",
    ]
    assert [entry["message"] for entry in errors] == ["Division by zero attempt"]
    assert errors[0]["level"] == "error"
    assert errors[0]["service"] == "calc-test"
    assert "timestamp" in errors[0]


def test_files_are_appended(tmp_path, target) -> None:
    """Restarting the sink keeps previous records."""
    for message in ("first", "second"):
        listener = configure_logging(tmp_path, target=target)
        target.warning(message)
        shutdown_logging(listener, target=target)

    lines = (tmp_path / "combined.log").read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["message"] for line in lines] == ["first", "second"]


def test_level_filters_records(tmp_path, target) -> None:
    """Records below the configured level are dropped."""
    listener = configure_logging(tmp_path, level="WARNING", target=target)
    target.info("hidden")
    target.warning("shown")
    shutdown_logging(listener, target=target)

    assert "hidden" not in (tmp_path / "combined.log").read_text(encoding="utf-8")


def test_console_output(tmp_path, target, capsys) -> None:
    """Records are also written to the console."""
    listener = configure_logging(tmp_path, target=target)
    target.info("to the console")
    shutdown_logging(listener, target=target)

    assert "INFO: to the console" in capsys.readouterr().err


def test_reconfigure_replaces_queue_handler(tmp_path, target) -> None:
    """Configuring twice leaves a single queue handler."""
    first = configure_logging(tmp_path, target=target)
    second = configure_logging(tmp_path / "other", target=target)

    assert sum(isinstance(handler, QueueHandler) for handler in target.handlers) == 1

    first.stop()
    shutdown_logging(second, target=target)
    assert target.handlers == []
    assert target.propagate is True
