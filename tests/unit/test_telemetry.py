"""Tests for telemetry module."""

import io
import json
import logging
from collections.abc import Iterator

import pytest

from webshotapi.telemetry import (
    JsonFormatter,
    LogContext,
    LogLevel,
    SensitiveDataMasker,
    WebshotLogger,
    get_log_context,
    get_logger,
    set_log_context,
)


class TestSensitiveDataMasker:
    """Tests for SensitiveDataMasker."""

    def test_mask_bearer(self) -> None:
        """Test bearer tokens are masked."""
        masker = SensitiveDataMasker()
        assert masker.mask("Authorization: Bearer abc123") == (
            "Authorization: Bearer ***REDACTED***"
        )

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Authorization=rawkey123", "Authorization=***REDACTED***"),
            ('{"Authorization": "rawkey123"}', '{"Authorization": "***REDACTED***"}'),
            ("authorization: Bearer abc123", "authorization: Bearer ***REDACTED***"),
        ],
    )
    def test_mask_authorization(self, text: str, expected: str) -> None:
        """Test authorization values are masked once, keeping the scheme."""
        masker = SensitiveDataMasker()
        assert masker.mask(text) == expected

    def test_mask_env_assignment(self) -> None:
        """Test env-style key assignment is masked."""
        masker = SensitiveDataMasker()
        assert "secret" not in masker.mask("WEBSHOTAPI_API_KEY=secret")

    def test_mask_dict(self) -> None:
        """Test sensitive keys are redacted recursively."""
        masker = SensitiveDataMasker()
        masked = masker.mask_dict(
            {"api_key": "k", "link": "https://example.com", "nested": {"token": "t"}}
        )
        assert masked == {
            "api_key": "***REDACTED***",
            "link": "https://example.com",
            "nested": {"token": "***REDACTED***"},
        }


class TestLogContext:
    """Tests for LogContext."""

    def test_to_dict_skips_empty(self) -> None:
        """Test unset fields are omitted."""
        assert LogContext().to_dict() == {}
        assert LogContext(request_index=0, path="extract").to_dict() == {
            "request_index": 0,
            "path": "extract",
        }

    def test_roundtrip_through_contextvar(self) -> None:
        """Test set/get restores known fields and extras."""
        set_log_context(LogContext(request_index=2, method="POST").with_extra(batch="b1"))
        context = get_log_context()
        assert context.request_index == 2
        assert context.method == "POST"
        assert context.extra == {"batch": "b1"}


class TestWebshotLogger:
    """Tests for WebshotLogger."""

    @pytest.fixture(autouse=True)
    def restore_logging(self) -> Iterator[None]:
        """Restore class-level logging configuration after each test."""
        level, handler = WebshotLogger._level, WebshotLogger._handler
        yield
        WebshotLogger._level, WebshotLogger._handler = level, handler
        for logger in WebshotLogger._loggers.values():
            logger.handlers.clear()
            if handler:
                logger.addHandler(handler)
            logger.setLevel(level.to_logging_level())

    def test_json_output(self) -> None:
        """Test JSON records carry fields, context and masking."""
        stream = io.StringIO()
        WebshotLogger.configure(level=LogLevel.DEBUG, format="json", stream=stream)
        logger = get_logger("webshotapi.tests.json")
        set_log_context(LogContext(request_index=1, path="screenshot/pdf"))

        logger.info("Sending Bearer abc", api_key="secret", total=3)

        record = json.loads(stream.getvalue())
        assert record["level"] == "INFO"
        assert record["message"] == "Sending Bearer ***REDACTED***"
        assert record["api_key"] == "***REDACTED***"
        assert record["total"] == 3
        assert record["context"] == {"request_index": 1, "path": "screenshot/pdf"}

    def test_text_output(self) -> None:
        """Test text records append key=value fields."""
        stream = io.StringIO()
        WebshotLogger.configure(level=LogLevel.INFO, format="text", stream=stream)
        logger = get_logger("webshotapi.tests.text")

        logger.debug("hidden")
        logger.warning("Request failed", request_index=4)

        output = stream.getvalue()
        assert "hidden" not in output
        assert "WARNING" in output
        assert output.rstrip().endswith("request_index=4")

    def test_exception_includes_traceback(self) -> None:
        """Test exception() logs the traceback."""
        stream = io.StringIO()
        WebshotLogger.configure(level=LogLevel.INFO, format="json", stream=stream)
        logger = get_logger("webshotapi.tests.exc")

        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logger.exception("Batch listener raised")

        assert "RuntimeError: boom" in json.loads(stream.getvalue())["exception"]

    def test_formatter_without_timestamp(self) -> None:
        """Test timestamp can be omitted."""
        record = logging.LogRecord("n", logging.INFO, "f", 1, "msg", None, None)
        data = json.loads(JsonFormatter(include_timestamp=False).format(record))
        assert "timestamp" not in data
