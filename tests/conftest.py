from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures: a deterministic formatter, a record factory and a
   recording handler double that logs the order it was offered records.
"""

import os
import sys
from typing import Callable, List, Optional

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from chainlog.core.formatters import CallableFormatter, Formatter  # noqa: E402
from chainlog.core.handlers.base import Handler  # noqa: E402
from chainlog.domain.levels import Level  # noqa: E402
from chainlog.domain.record import Record  # noqa: E402
from chainlog.domain.result import ErrorCode, Result, failure, success  # noqa: E402


# -----------------------------------------------------------------------------
# Test Doubles
# -----------------------------------------------------------------------------
class RecordingHandler(Handler):
    """
    Handler double that appends its label to a shared journal on every emit.

    If ``error`` is set, every emit fails with that code.
    """

    def __init__(
            self,
            label: str,
            journal: List[str],
            level: Level = Level.DEBUG,
            error: Optional[ErrorCode] = None,
    ) -> None:
        super().__init__(object(), level, CallableFormatter(lambda r: r.message))
        self.label = label
        self.journal = journal
        self.error = error
        self.contents: List[str] = []

    def emit(self, content: str) -> Result:
        self.journal.append(self.label)
        self.contents.append(content)
        if self.error is not None:
            return failure(self.error, f"{self.label} failed")
        return success(len(content), content)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def line_formatter() -> Formatter:
    """Render records as 'LEVEL:message' lines."""
    return CallableFormatter(lambda r: f"{r.level.name}:{r.message}\n")


@pytest.fixture
def make_record() -> Callable[..., Record]:
    """
    Return a factory building records with sensible defaults.

    Returns:
        Callable[..., Record]: Factory accepting level and message overrides.
    """
    def _make(level: Level = Level.INFO, message: str = "hello", name: str = "test") -> Record:
        return Record(
            name=name,
            level=level,
            file="test_module.py",
            line=42,
            function="test_function",
            timestamp=1700000000.0,
            message=message,
        )
    return _make


@pytest.fixture
def journal() -> List[str]:
    """Shared, ordered log of handler invocations."""
    return []


@pytest.fixture
def make_handler(journal: List[str]) -> Callable[..., RecordingHandler]:
    """Return a factory for RecordingHandler instances sharing one journal."""
    def _make(
            label: str,
            level: Level = Level.DEBUG,
            error: Optional[ErrorCode] = None,
    ) -> RecordingHandler:
        return RecordingHandler(label, journal, level, error)
    return _make
