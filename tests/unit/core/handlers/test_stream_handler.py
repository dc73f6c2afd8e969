from __future__ import annotations

"""
Unit tests for the Generic and Stream Handlers.

Verifies:
1. Handler-level filtering and validation.
2. Byte accounting for text and binary streams.
3. I/O failure detection (exceptions, negative and truncated writes).
4. Formatter failures surfacing as results.
"""

import io
from typing import Any

import pytest

from chainlog.core.formatters import CallableFormatter, TemplateFormatter
from chainlog.core.handlers import StreamHandler
from chainlog.domain.levels import Level
from chainlog.domain.result import ErrorCode


class ScriptedStream:
    """Text sink whose write() returns a scripted value or raises."""

    def __init__(self, reported: Any = None, exc: Exception | None = None) -> None:
        self.reported = reported
        self.exc = exc
        self.written = []

    def write(self, text: str) -> Any:
        if self.exc is not None:
            raise self.exc
        self.written.append(text)
        return len(text) if self.reported is None else self.reported


# -----------------------------------------------------------------------------
# Validation and Filtering
# -----------------------------------------------------------------------------
def test_handler_rejects_missing_formatter_or_bad_level(line_formatter):
    from chainlog.core.handlers.base import Handler

    class Dummy(Handler):
        def emit(self, content):  # pragma: no cover - never called
            raise AssertionError

    with pytest.raises(TypeError):
        Dummy(io.StringIO(), Level.DEBUG, None)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        Dummy(io.StringIO(), 99, line_formatter)
    with pytest.raises(ValueError):
        Dummy(None, Level.DEBUG, line_formatter)


def test_handler_filters_on_its_own_level(make_record, line_formatter):
    handler = StreamHandler(io.StringIO(), Level.WARNING, line_formatter)

    assert handler.is_loggable(make_record(level=Level.WARNING)) is True
    assert handler.is_loggable(make_record(level=Level.INFO)) is False


def test_stream_handler_defaults_to_stderr_and_template_formatter():
    import sys

    handler = StreamHandler()
    assert handler.destination is sys.stderr
    assert isinstance(handler.formatter, TemplateFormatter)


# -----------------------------------------------------------------------------
# Writing and Accounting
# -----------------------------------------------------------------------------
def test_publish_writes_formatted_text_and_counts_bytes(make_record, line_formatter):
    sink = io.StringIO()
    handler = StreamHandler(sink, Level.DEBUG, line_formatter)

    result = handler.publish(make_record(message="hello"))

    assert result.ok
    assert sink.getvalue() == "INFO:hello\n"
    assert result.bytes_written == len("INFO:hello\n")
    assert result.content == "INFO:hello\n"
    assert handler.bytes_written == result.bytes_written


def test_byte_accounting_uses_encoded_length(make_record, line_formatter):
    sink = io.StringIO()
    handler = StreamHandler(sink, Level.DEBUG, line_formatter)

    result = handler.publish(make_record(message="é"))

    # "INFO:" + 2 bytes for 'é' + newline
    assert result.bytes_written == 8


def test_binary_stream_receives_bytes(make_record, line_formatter):
    sink = io.BytesIO()
    handler = StreamHandler(sink, Level.DEBUG, line_formatter)

    result = handler.publish(make_record(message="ok"))

    assert result.ok
    assert sink.getvalue() == b"INFO:ok\n"


def test_lifetime_counter_accumulates(make_record, line_formatter):
    handler = StreamHandler(io.StringIO(), Level.DEBUG, line_formatter)

    handler.publish(make_record(message="a"))
    handler.publish(make_record(message="bb"))

    assert handler.bytes_written == len("INFO:a\n") + len("INFO:bb\n")


# -----------------------------------------------------------------------------
# Failure Detection
# -----------------------------------------------------------------------------
def test_write_exception_is_io_error(make_record, line_formatter):
    handler = StreamHandler(ScriptedStream(exc=OSError("disk gone")), Level.DEBUG, line_formatter)

    result = handler.publish(make_record())

    assert result.error is ErrorCode.IO_ERROR
    assert result.bytes_written == 0
    assert handler.bytes_written == 0


def test_negative_write_count_is_io_error_with_zero_bytes(make_record, line_formatter):
    handler = StreamHandler(ScriptedStream(reported=-1), Level.DEBUG, line_formatter)

    result = handler.publish(make_record())

    assert result.error is ErrorCode.IO_ERROR
    assert result.bytes_written == 0
    assert handler.bytes_written == 0


def test_truncated_write_is_io_error_but_counts_partial_bytes(make_record, line_formatter):
    handler = StreamHandler(ScriptedStream(reported=3), Level.DEBUG, line_formatter)

    result = handler.publish(make_record(message="hello"))

    assert result.error is ErrorCode.IO_ERROR
    assert result.bytes_written == 3
    assert handler.bytes_written == 3
    assert "truncated" in result.detail


def test_closed_stream_is_io_error(make_record, line_formatter):
    sink = io.StringIO()
    handler = StreamHandler(sink, Level.DEBUG, line_formatter)
    sink.close()

    assert handler.publish(make_record()).error is ErrorCode.IO_ERROR


def test_publish_after_close_fails(make_record, line_formatter):
    sink = io.StringIO()
    handler = StreamHandler(sink, Level.DEBUG, line_formatter)
    handler.close()

    result = handler.publish(make_record())

    assert result.error is ErrorCode.IO_ERROR
    assert sink.getvalue() == ""
    # Stream handlers do not own their stream
    assert sink.closed is False


def test_formatter_exception_is_format_error(make_record):
    def broken(record):
        raise KeyError("missing")

    sink = io.StringIO()
    handler = StreamHandler(sink, Level.DEBUG, CallableFormatter(broken))

    result = handler.publish(make_record())

    assert result.error is ErrorCode.FORMAT_ERROR
    assert sink.getvalue() == ""


def test_formatter_memory_error_is_out_of_memory(make_record):
    def exhausted(record):
        raise MemoryError

    handler = StreamHandler(io.StringIO(), Level.DEBUG, CallableFormatter(exhausted))

    assert handler.publish(make_record()).error is ErrorCode.OUT_OF_MEMORY


def test_formatter_returning_non_text_is_format_error(make_record):
    handler = StreamHandler(io.StringIO(), Level.DEBUG, CallableFormatter(lambda r: b"bytes"))

    assert handler.publish(make_record()).error is ErrorCode.FORMAT_ERROR


def test_text_stream_bytes_use_the_stream_encoding(tmp_path, make_record):
    target = tmp_path / "latin.log"
    formatter = CallableFormatter(lambda r: r.message)

    with open(target, "w", encoding="latin-1") as sink:
        handler = StreamHandler(sink, Level.DEBUG, formatter)
        result = handler.publish(make_record(message="é" * 10))

    assert result.ok
    assert result.bytes_written == 10
    assert handler.bytes_written == 10
    assert target.stat().st_size == 10
