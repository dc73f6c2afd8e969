from __future__ import annotations

"""
Stream and File Handlers.

The stream handler writes rendered text to any writable stream and
accounts for the bytes that reached it. The file handler is a stream
handler over a file it opens (truncating) and closes itself.
"""

import io
import logging
import os
import sys
from typing import Any, Optional, Union

from chainlog.core.formatters import Formatter, TemplateFormatter
from chainlog.core.handlers.base import Handler
from chainlog.domain.levels import Level
from chainlog.domain.result import ErrorCode, Result, failure, success
from chainlog.infra.fs import open_truncated

logger = logging.getLogger(__name__)

DEFAULT_ENCODING: str = "utf-8"

# -----------------------------------------------------------------------------
# STREAM HANDLER
# -----------------------------------------------------------------------------

class StreamHandler(Handler):
    """
    Writes records to a text or binary stream.

    Text streams receive ``str``; binary streams receive the encoded bytes.
    Byte accounting uses the encoded length, in the text stream's own
    encoding when it declares one.
    """

    def __init__(
            self,
            stream: Any = None,
            level: Level = Level.DEBUG,
            formatter: Optional[Formatter] = None,
            encoding: str = DEFAULT_ENCODING,
    ) -> None:
        """
        Args:
            stream: Destination stream. Defaults to sys.stderr.
            level: Minimum record level accepted.
            formatter: Record renderer. Defaults to a TemplateFormatter.
            encoding: Encoding used for binary streams, and for byte accounting
                on text streams that do not declare their own.
        """
        super().__init__(
            sys.stderr if stream is None else stream,
            level,
            TemplateFormatter() if formatter is None else formatter,
        )
        self.encoding = encoding

    def emit(self, content: str) -> Result:
        """
        Write the text and verify the whole of it was accepted.

        A write error or a negative count is an I/O failure with nothing
        counted. A count shorter than the content is a truncated write:
        the partial bytes are counted but the result is still a failure.
        """
        stream = self._destination
        binary = _is_binary(stream)
        encoding = self.encoding if binary else _stream_encoding(stream, self.encoding)
        data = content.encode(encoding, errors="replace")
        expected = len(data) if binary else len(content)

        try:
            reported = stream.write(data if binary else content)
        except (OSError, ValueError) as e:
            logger.error(f"{self!r}: write failed: {e}")
            return failure(ErrorCode.IO_ERROR, f"write failed: {e}", 0, content)

        if reported is None:
            reported = expected
        if reported < 0:
            logger.error(f"{self!r}: stream reported a negative write count ({reported})")
            return failure(ErrorCode.IO_ERROR, "stream reported a write error", 0, content)

        if reported >= expected:
            written = len(data)
        elif binary:
            written = reported
        else:
            written = len(content[:reported].encode(encoding, errors="replace"))
        self.bytes_written += written

        if reported < expected:
            detail = f"truncated write: {reported} of {expected} units accepted"
            logger.error(f"{self!r}: {detail}")
            return failure(ErrorCode.IO_ERROR, detail, written, content)

        try:
            flush = getattr(stream, "flush", None)
            if flush is not None:
                flush()
        except (OSError, ValueError) as e:
            logger.error(f"{self!r}: flush failed: {e}")
            return failure(ErrorCode.IO_ERROR, f"flush failed: {e}", written, content)

        return success(written, content)

# -----------------------------------------------------------------------------
# FILE HANDLER
# -----------------------------------------------------------------------------

class FileHandler(StreamHandler):
    """
    Stream handler over a file opened in truncate mode. Closing the
    handler closes the file.
    """

    def __init__(
            self,
            path: Union[str, "os.PathLike[str]"],
            level: Level = Level.DEBUG,
            formatter: Optional[Formatter] = None,
            encoding: str = DEFAULT_ENCODING,
    ) -> None:
        """
        Args:
            path: Target file. Parent directories are created as needed.
            level: Minimum record level accepted.
            formatter: Record renderer. Defaults to a TemplateFormatter.
            encoding: Encoding of the written text.

        Raises:
            OSError: If the file cannot be opened.
        """
        stream = open_truncated(path)
        try:
            super().__init__(stream, level, formatter, encoding)
        except Exception:
            stream.close()
            raise
        self._path = os.fspath(path)

    @property
    def path(self) -> str:
        return self._path

    def _on_close(self) -> None:
        self._destination.close()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._path} level={self.level.name}>"


# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _is_binary(stream: Any) -> bool:
    """Decide whether a stream expects bytes rather than text."""
    if isinstance(stream, io.TextIOBase):
        return False
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        return True
    return "b" in str(getattr(stream, "mode", ""))


def _stream_encoding(stream: Any, default: str) -> str:
    """Encoding a text stream applies on write, or ``default`` if it has none."""
    encoding = getattr(stream, "encoding", None)
    return encoding if isinstance(encoding, str) and encoding else default
