from __future__ import annotations

"""
Unit tests for Record Formatters and Message Construction.
"""

import time

import pytest

from chainlog.core.formatters import CallableFormatter, TemplateFormatter
from chainlog.core.message import build_message
from chainlog.domain.levels import Level


def test_template_formatter_exposes_record_fields(make_record):
    fmt = TemplateFormatter(
        "%(levelname)s|%(levelno)d|%(name)s|%(filename)s:%(lineno)d|%(funcName)s|%(message)s\n"
    )

    text = fmt.format(make_record(level=Level.ERROR, message="boom", name="svc"))

    assert text == "ERROR|40|svc|test_module.py:42|test_function|boom\n"


def test_template_formatter_renders_asctime_with_datefmt(make_record):
    record = make_record()
    fmt = TemplateFormatter("%(asctime)s", datefmt="%Y")

    expected = time.strftime("%Y", time.localtime(record.timestamp))
    assert fmt.format(record) == expected


def test_default_template_ends_with_newline(make_record):
    assert TemplateFormatter().format(make_record()).endswith("\n")


def test_callable_formatter_requires_callable():
    with pytest.raises(TypeError):
        CallableFormatter("not callable")  # type: ignore[arg-type]


@pytest.mark.parametrize("fmt, args, expected", [
    ("plain", (), "plain"),
    ("50% off", (), "50% off"),
    ("%s=%d", ("x", 3), "x=3"),
    ("%(user)s logged in", ({"user": "ana"},), "ana logged in"),
])
def test_build_message(fmt, args, expected):
    assert build_message(fmt, args) == expected


def test_build_message_propagates_mismatch():
    with pytest.raises(TypeError):
        build_message("%d", ("x",))
