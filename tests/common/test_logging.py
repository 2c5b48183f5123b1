"""Tests for shared logging helpers."""

import json
import logging

import pytest

from catalogue_common.logging import StructuredFormatter, get_logger, setup_logging


def make_record(level: int = logging.INFO, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="catalogue_web.client",
        level=level,
        pathname="client.py",
        lineno=42,
        msg="Listed %d books",
        args=(3,),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


def test_structured_formatter_emits_json() -> None:
    """Test records become one JSON object with extra fields merged in."""
    data = json.loads(StructuredFormatter().format(make_record(request_id="abc")))

    assert data["level"] == "INFO"
    assert data["logger"] == "catalogue_web.client"
    assert data["message"] == "Listed 3 books"
    assert data["request_id"] == "abc"
    assert "location" not in data


def test_structured_formatter_adds_location_for_errors() -> None:
    """Test error records say where they came from."""
    data = json.loads(StructuredFormatter().format(make_record(logging.ERROR)))

    assert data["location"]["line"] == 42


def test_context_logger_merges_context(caplog: pytest.LogCaptureFixture) -> None:
    """Test fixed context travels with every record."""
    logger = get_logger("catalogue_tests.context", management_url="http://localhost:8080")

    with caplog.at_level(logging.INFO, logger="catalogue_tests.context"):
        logger.info("hello", extra={"isbn": "ABC"})

    record = caplog.records[-1]
    assert record.management_url == "http://localhost:8080"
    assert record.isbn == "ABC"


def test_setup_logging_configures_package_loggers() -> None:
    """Test each named logger gets one handler at the requested level."""
    setup_logging(["catalogue_tests.setup"], level="debug", log_format="structured")
    setup_logging(["catalogue_tests.setup"], level="warning", log_format="structured")

    logger = logging.getLogger("catalogue_tests.setup")
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, StructuredFormatter)
    assert logging.getLogger("httpx").level == logging.WARNING
