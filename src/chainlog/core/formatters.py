from __future__ import annotations

"""
Record Formatters.

A formatter is the opaque transform that turns a Record into the final
text a handler writes. Handlers never inspect records beyond their level;
everything visible in the output comes from here.
"""

import os
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict

from chainlog.domain.record import Record

DEFAULT_FORMAT: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s\n"
DEFAULT_DATEFMT: str = "%Y-%m-%d %H:%M:%S"

# -----------------------------------------------------------------------------
# FORMATTER INTERFACE
# -----------------------------------------------------------------------------

class Formatter(ABC):
    """
    Abstract base class for record renderers.
    """

    @abstractmethod
    def format(self, record: Record) -> str:
        """
        Render a record into its final textual representation.

        Args:
            record: The log event to render.

        Returns:
            str: Text to be written verbatim by the handler.
        """
        pass

# -----------------------------------------------------------------------------
# CONCRETE FORMATTERS
# -----------------------------------------------------------------------------

class TemplateFormatter(Formatter):
    """
    printf-style template over the record fields.

    Available keys: asctime, created, levelname, levelno, name, filename,
    pathname, lineno, funcName, message. The template is written as-is, so
    it carries its own line terminator.
    """

    def __init__(self, fmt: str = DEFAULT_FORMAT, datefmt: str = DEFAULT_DATEFMT) -> None:
        self.fmt = fmt
        self.datefmt = datefmt

    def format(self, record: Record) -> str:
        return self.fmt % self._fields(record)

    def format_time(self, record: Record) -> str:
        return time.strftime(self.datefmt, time.localtime(record.timestamp))

    def _fields(self, record: Record) -> Dict[str, Any]:
        return {
            "asctime": self.format_time(record),
            "created": record.timestamp,
            "levelname": record.level.name,
            "levelno": int(record.level),
            "name": record.name,
            "filename": os.path.basename(record.file),
            "pathname": record.file,
            "lineno": record.line,
            "funcName": record.function,
            "message": record.message,
        }


class CallableFormatter(Formatter):
    """Adapts a plain ``Record -> str`` function to the Formatter interface."""

    def __init__(self, func: Callable[[Record], str]) -> None:
        if not callable(func):
            raise TypeError("CallableFormatter requires a callable")
        self._func = func

    def format(self, record: Record) -> str:
        return self._func(record)
