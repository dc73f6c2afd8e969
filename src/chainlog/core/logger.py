from __future__ import annotations

"""
Logger Dispatch Core.

A logger owns a name, a minimum level and an ordered chain of handler
references. The most recently added handler is offered each record first.
Dispatch is fail-fast: the first handler failure stops the iteration and
is returned to the caller unchanged.
"""

import logging
import sys
import time
from collections import deque
from typing import Any, Deque, List, Optional

from chainlog.core.handlers.base import Handler
from chainlog.core.message import build_message
from chainlog.domain.levels import Level, check_level
from chainlog.domain.record import Record
from chainlog.domain.result import ErrorCode, Result, failure, success

logger = logging.getLogger(__name__)

_UNKNOWN_FILE: str = "(unknown file)"
_UNKNOWN_FUNCTION: str = "(unknown function)"


class Logger:
    """
    Named, leveled entry point that fans records out to its handlers.
    """

    def __init__(self, name: str, level: Level = Level.INFO) -> None:
        """
        Args:
            name: Logger name stamped on every record.
            level: Minimum record level dispatched to the handlers.

        Raises:
            TypeError: If the name is not a string.
            ValueError: If the level is outside [DEBUG, FATAL].
        """
        self._name = _check_name(name)
        self._level = check_level(level)
        self._handlers: Deque[Handler] = deque()

    # -------------------------------------------------------------------------
    # ACCESSORS
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = _check_name(value)

    @property
    def level(self) -> Level:
        return self._level

    @level.setter
    def level(self, value: Level) -> None:
        self._level = check_level(value)

    @property
    def handlers(self) -> List[Handler]:
        """Snapshot of the chain in dispatch order (head first)."""
        return list(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    # -------------------------------------------------------------------------
    # HANDLER CHAIN
    # -------------------------------------------------------------------------

    def add_handler(self, handler: Handler) -> Handler:
        """
        Put a handler at the head of the chain.

        Args:
            handler: Handler to add. It will be offered records before all
                previously added handlers.

        Returns:
            Handler: The same handler reference.
        """
        if not isinstance(handler, Handler):
            raise TypeError(f"Expected a Handler, got {type(handler).__name__}")
        self._handlers.appendleft(handler)
        logger.debug(f"Logger '{self._name}': added {handler!r}")
        return handler

    def remove_handler(self, handler: Handler) -> Optional[Handler]:
        """
        Detach the first chain entry that is this exact handler object.

        Args:
            handler: Handler to detach. Matching is by identity only.

        Returns:
            Optional[Handler]: The removed handler, or None if it was not attached.
        """
        for index, current in enumerate(self._handlers):
            if current is handler:
                del self._handlers[index]
                logger.debug(f"Logger '{self._name}': removed {handler!r}")
                return current
        return None

    def pop_handler(self) -> Optional[Handler]:
        """
        Detach and return the head of the chain.

        Returns:
            Optional[Handler]: The most recently added handler, or None if empty.
        """
        if not self._handlers:
            return None
        return self._handlers.popleft()

    # -------------------------------------------------------------------------
    # DISPATCH
    # -------------------------------------------------------------------------

    def is_loggable(self, level: Level) -> bool:
        return check_level(level) >= self._level

    def log_record(self, record: Record) -> Result:
        """
        Offer a record to every handler that accepts it, in chain order.

        Args:
            record: The event to dispatch.

        Returns:
            Result: OK if the record was filtered out or every invoked handler
            succeeded; otherwise the first failing handler's result.
        """
        if not self.is_loggable(record.level):
            return success()

        for handler in list(self._handlers):
            if not handler.is_loggable(record):
                continue
            result = handler.publish(record)
            if not result.ok:
                logger.warning(
                    f"Logger '{self._name}': {handler!r} failed with "
                    f"{result.error.name}; remaining handlers skipped"
                )
                return result
        return success()

    def log(
            self,
            level: Level,
            fmt: str,
            *args: Any,
            file: Optional[str] = None,
            line: Optional[int] = None,
            function: Optional[str] = None,
            timestamp: Optional[float] = None,
    ) -> Result:
        """
        Build a record from a printf-style message and dispatch it.

        Source location defaults to the caller's frame and the timestamp to
        the current time when not supplied.

        Args:
            level: Severity of the event.
            fmt: printf-style message template.
            *args: Template arguments.
            file: Source file of the call site.
            line: Source line of the call site.
            function: Enclosing function of the call site.
            timestamp: Event time in seconds since the epoch.

        Returns:
            Result: OUT_OF_MEMORY or FORMAT_ERROR if the message or record
            could not be built (no handler is touched), else the dispatch result.
        """
        level = check_level(level)
        if file is None or line is None or function is None:
            caller = _caller_location(2)
            file = caller[0] if file is None else file
            line = caller[1] if line is None else line
            function = caller[2] if function is None else function
        return self._log(level, fmt, args, file, line, function, timestamp)

    def debug(self, fmt: str, *args: Any) -> Result:
        return self._log_from_caller(Level.DEBUG, fmt, args)

    def info(self, fmt: str, *args: Any) -> Result:
        return self._log_from_caller(Level.INFO, fmt, args)

    def warning(self, fmt: str, *args: Any) -> Result:
        return self._log_from_caller(Level.WARNING, fmt, args)

    warn = warning

    def error(self, fmt: str, *args: Any) -> Result:
        return self._log_from_caller(Level.ERROR, fmt, args)

    def fatal(self, fmt: str, *args: Any) -> Result:
        return self._log_from_caller(Level.FATAL, fmt, args)

    def _log_from_caller(self, level: Level, fmt: str, args: Any) -> Result:
        file, line, function = _caller_location(3)
        return self._log(level, fmt, args, file, line, function, None)

    def _log(
            self,
            level: Level,
            fmt: str,
            args: Any,
            file: str,
            line: int,
            function: str,
            timestamp: Optional[float],
    ) -> Result:
        try:
            message = build_message(fmt, tuple(args))
        except MemoryError:
            return failure(ErrorCode.OUT_OF_MEMORY, "out of memory while building message")
        except (TypeError, ValueError, KeyError) as e:
            logger.warning(f"Logger '{self._name}': bad message format {fmt!r}: {e}")
            return failure(ErrorCode.FORMAT_ERROR, f"bad message format: {e}")

        try:
            record = Record(
                name=self._name,
                level=level,
                file=file,
                line=line,
                function=function,
                timestamp=time.time() if timestamp is None else timestamp,
                message=message,
            )
        except MemoryError:
            return failure(ErrorCode.OUT_OF_MEMORY, "out of memory while building record")

        return self.log_record(record)

    # -------------------------------------------------------------------------
    # TEARDOWN
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Forget every handler reference without closing the handlers."""
        self._handlers.clear()

    def deep_close(self) -> None:
        """Drain the chain head first, closing every handler."""
        handler = self.pop_handler()
        while handler is not None:
            handler.close()
            handler = self.pop_handler()

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.deep_close()

    def __repr__(self) -> str:
        return f"<Logger {self._name} level={self._level.name} handlers={len(self._handlers)}>"

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _check_name(name: str) -> str:
    if not isinstance(name, str):
        raise TypeError(f"Logger name must be a string, got {type(name).__name__}")
    return name


def _caller_location(depth: int) -> tuple:
    """Return (file, line, function) of the frame ``depth`` levels up."""
    try:
        frame = sys._getframe(depth)
    except ValueError:
        return _UNKNOWN_FILE, 0, _UNKNOWN_FUNCTION
    code = frame.f_code
    return code.co_filename, frame.f_lineno, code.co_name
