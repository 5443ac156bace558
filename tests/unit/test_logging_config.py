"""Tests for logging setup and token redaction."""

import io
import json
import logging

import pytest

from src.utils.logging_config import (
    REDACTED,
    get_logger,
    redact,
    setup_logging,
)


@pytest.fixture
def stream():
    return io.StringIO()


def test_redacts_access_and_refresh_tokens():
    text = "access=ya29.a0AfH6SMBx-abc_123.def refresh=1//0gXyz-ABC_def"
    cleaned = redact(text)
    assert "ya29." not in cleaned
    assert "1//" not in cleaned
    assert cleaned.count(REDACTED) == 2


def test_text_without_tokens_unchanged():
    assert redact("Fetched 3 accounts") == "Fetched 3 accounts"


def test_text_format(stream):
    setup_logging(level="INFO", log_format="text", stream=stream)
    get_logger("tests.logging").info("hello %s", "world")

    line = stream.getvalue().strip()
    assert " - src.tests.logging - INFO - hello world" in line


def test_json_format_includes_extras(stream):
    setup_logging(level="DEBUG", log_format="json", stream=stream)
    get_logger("src.api").warning("Rejected", extra={"origin": "https://evil.example"})

    record = json.loads(stream.getvalue().strip())
    assert record["level"] == "WARNING"
    assert record["logger"] == "src.api"
    assert record["message"] == "Rejected"
    assert record["origin"] == "https://evil.example"
    assert "timestamp" in record


def test_json_format_includes_exception(stream):
    setup_logging(log_format="json", stream=stream)
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        get_logger("errors").exception("Failed")

    record = json.loads(stream.getvalue().strip())
    assert "RuntimeError: boom" in record["exception"]


def test_tokens_redacted_in_handler_output(stream):
    setup_logging(stream=stream)
    get_logger("auth").info("Got token %s", "ya29.secret-token-value")

    output = stream.getvalue()
    assert "ya29.secret-token-value" not in output
    assert REDACTED in output


def test_level_filters_records(stream):
    setup_logging(level="WARNING", stream=stream)
    get_logger("quiet").info("not shown")
    assert stream.getvalue() == ""


def test_setup_is_idempotent(stream):
    setup_logging(stream=stream)
    logger = setup_logging(stream=stream)
    assert len(logger.handlers) == 1
    assert logger is logging.getLogger("src")
