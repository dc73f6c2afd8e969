from __future__ import annotations

"""
Unit tests for the Result and Record Models.

Verifies:
1. Data integrity of the success/failure factories.
2. Immutability of frozen dataclasses.
"""

from dataclasses import FrozenInstanceError

import pytest

from chainlog.domain.result import ErrorCode, Result, failure, success


def test_success_factory_populates_fields():
    result = success(12, "hello world\n")

    assert isinstance(result, Result)
    assert result.ok is True
    assert result.error is ErrorCode.OK
    assert result.bytes_written == 12
    assert result.content == "hello world\n"
    assert result.detail == ""


def test_default_result_is_ok():
    assert Result().ok is True


def test_failure_factory_keeps_partial_bytes():
    result = failure(ErrorCode.IO_ERROR, "disk full", bytes_written=3, content="abcdef")

    assert result.ok is False
    assert result.error is ErrorCode.IO_ERROR
    assert result.bytes_written == 3
    assert result.detail == "disk full"


def test_failure_factory_rejects_ok_code():
    with pytest.raises(ValueError):
        failure(ErrorCode.OK)


def test_result_and_record_are_immutable(make_record):
    result = success(1, "x")
    with pytest.raises(FrozenInstanceError):
        result.bytes_written = 2  # type: ignore[misc]

    record = make_record()
    with pytest.raises(FrozenInstanceError):
        record.message = "changed"  # type: ignore[misc]
