from __future__ import annotations

"""
Generic Handler Definition.

A handler owns a minimum level, a formatter and a destination. Publishing
renders the record and hands the text to the variant-specific write
strategy (``emit``). This layer is unaware of what the destination is:
stream, file or rotating file.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from chainlog.core.formatters import Formatter
from chainlog.domain.levels import Level, check_level
from chainlog.domain.record import Record
from chainlog.domain.result import ErrorCode, Result, failure

logger = logging.getLogger(__name__)


class Handler(ABC):
    """
    Abstract chain unit: filters, formats and writes records.

    Subclasses implement ``emit`` (the publish strategy) and may override
    ``_on_close`` to release the resources they own.
    """

    def __init__(self, destination: Any, level: Level, formatter: Formatter) -> None:
        """
        Args:
            destination: Writable sink owned or referenced by the handler.
            level: Minimum record level this handler accepts.
            formatter: Renderer applied to every published record.

        Raises:
            TypeError: If the formatter is missing or not a Formatter.
            ValueError: If the level is outside [DEBUG, FATAL] or the destination is None.
        """
        if destination is None:
            raise ValueError("Handler destination must not be None")
        self._destination = destination
        self._level = check_level(level)
        self._formatter = _check_formatter(formatter)
        self._closed = False
        self.bytes_written: int = 0

    # -------------------------------------------------------------------------
    # ACCESSORS
    # -------------------------------------------------------------------------

    @property
    def destination(self) -> Any:
        return self._destination

    @property
    def level(self) -> Level:
        return self._level

    @level.setter
    def level(self, value: Level) -> None:
        self._level = check_level(value)

    @property
    def formatter(self) -> Formatter:
        return self._formatter

    @formatter.setter
    def formatter(self, value: Formatter) -> None:
        self._formatter = _check_formatter(value)

    @property
    def closed(self) -> bool:
        return self._closed

    # -------------------------------------------------------------------------
    # PUBLISHING
    # -------------------------------------------------------------------------

    def is_loggable(self, record: Record) -> bool:
        """Check the record against this handler's own threshold."""
        return record.level >= self._level

    def publish(self, record: Record) -> Result:
        """
        Render the record and pass the text to the write strategy.

        Formatter failures are reported as results, never raised.

        Args:
            record: The event to publish.

        Returns:
            Result: Outcome of the write, or of the formatting step if it failed.
        """
        if self._closed:
            return failure(ErrorCode.IO_ERROR, "handler is closed")

        try:
            content = self._formatter.format(record)
        except MemoryError:
            logger.error(f"{self!r}: out of memory while formatting record")
            return failure(ErrorCode.OUT_OF_MEMORY, "out of memory while formatting record")
        except Exception as e:
            logger.warning(f"{self!r}: formatter failed: {e}")
            return failure(ErrorCode.FORMAT_ERROR, f"formatter failed: {e}")

        if not isinstance(content, str):
            return failure(
                ErrorCode.FORMAT_ERROR,
                f"formatter returned {type(content).__name__}, expected str",
            )

        return self.emit(content)

    @abstractmethod
    def emit(self, content: str) -> Result:
        """
        Write rendered text to the destination.

        Args:
            content: Text produced by the formatter.

        Returns:
            Result: Bytes written and the content on success, a failure otherwise.
        """
        pass

    # -------------------------------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """
        Release the handler. Runs the variant cleanup exactly once.

        The formatter is not released here; it may be shared between handlers.
        """
        if self._closed:
            return
        self._closed = True
        self._on_close()

    def _on_close(self) -> None:
        """Variant cleanup hook. Plain handlers own nothing."""

    def __enter__(self) -> Handler:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} level={self._level.name}>"


def _check_formatter(formatter: Optional[Formatter]) -> Formatter:
    if formatter is None:
        raise TypeError("Handler formatter must not be None")
    if not isinstance(formatter, Formatter):
        raise TypeError(f"Expected a Formatter, got {type(formatter).__name__}")
    return formatter
