from __future__ import annotations

"""
Size-Triggered Rotating File Handler.

Writes to ``<base>.0`` first. Before every publish, if the bytes written
since the last rotation have reached the threshold, the handler switches
to ``<base>.<counter + 1>`` and starts counting again. Rotation is checked
before writing, so the record that crosses the threshold is the last one
in the old segment and the next record opens the new one.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Union

from chainlog.core.formatters import Formatter
from chainlog.core.handlers.stream import DEFAULT_ENCODING, FileHandler
from chainlog.domain.levels import Level
from chainlog.domain.result import ErrorCode, Result, failure
from chainlog.infra.fs import open_truncated, rotated_path

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD_BYTES: int = 2 * 1024 * 1024  # 2MB


@dataclass
class RotatingContext:
    """
    Rotation state owned by a single handler.

    Attributes:
        threshold_bytes: Bytes per segment before the next publish rotates.
        bytes_since_rotation: Bytes written to the current segment.
        rotation_counter: Numeric suffix of the currently open segment.
        base_path: Path shared by all segments.
    """
    threshold_bytes: int
    bytes_since_rotation: int = 0
    rotation_counter: int = 0
    base_path: str = ""


class RotatingFileHandler(FileHandler):
    """
    File handler that rolls over to a new numbered segment by size.
    """

    def __init__(
            self,
            base_path: Union[str, "os.PathLike[str]"],
            level: Level = Level.DEBUG,
            formatter: Optional[Formatter] = None,
            threshold_bytes: int = DEFAULT_THRESHOLD_BYTES,
            encoding: str = DEFAULT_ENCODING,
    ) -> None:
        """
        Args:
            base_path: Segment path prefix; the first segment is ``<base_path>.0``.
            level: Minimum record level accepted.
            formatter: Record renderer. Defaults to a TemplateFormatter.
            threshold_bytes: Rotation threshold. 0 rotates before every write.
            encoding: Encoding of the written text.

        Raises:
            TypeError: If the threshold is not an int.
            ValueError: If the threshold is negative.
            OSError: If the first segment cannot be opened.
        """
        if isinstance(threshold_bytes, bool) or not isinstance(threshold_bytes, int):
            raise TypeError("threshold_bytes must be an int")
        if threshold_bytes < 0:
            raise ValueError(f"threshold_bytes must be >= 0, got {threshold_bytes}")

        base = os.fspath(base_path)
        super().__init__(rotated_path(base, 0), level, formatter, encoding)
        try:
            self._context = RotatingContext(threshold_bytes=threshold_bytes, base_path=base)
        except MemoryError:
            self.close()
            raise

    # -------------------------------------------------------------------------
    # STATE ACCESSORS
    # -------------------------------------------------------------------------

    @property
    def base_path(self) -> str:
        return self._context.base_path

    @property
    def threshold_bytes(self) -> int:
        return self._context.threshold_bytes

    @property
    def rotation_counter(self) -> int:
        return self._context.rotation_counter

    @property
    def bytes_since_rotation(self) -> int:
        return self._context.bytes_since_rotation

    @property
    def current_path(self) -> str:
        return self._path

    # -------------------------------------------------------------------------
    # PUBLISH STRATEGY
    # -------------------------------------------------------------------------

    def emit(self, content: str) -> Result:
        """
        Rotate if the current segment is full, then write.

        Returns:
            Result: The write outcome, or the rotation failure. Only
            successful writes advance the segment byte count.
        """
        ctx = self._context
        if ctx.bytes_since_rotation >= ctx.threshold_bytes:
            error = self._rotate()
            if error is not None:
                return error

        result = super().emit(content)
        if result.ok:
            ctx.bytes_since_rotation += result.bytes_written
        return result

    def _rotate(self) -> Optional[Result]:
        """
        Switch the destination to the next numbered segment.

        The new segment is opened before the old one is closed; if opening
        fails the handler keeps writing state untouched.

        Returns:
            Optional[Result]: None on success, an I/O failure otherwise.
        """
        ctx = self._context
        next_counter = ctx.rotation_counter + 1
        next_path = rotated_path(ctx.base_path, next_counter)

        try:
            stream = open_truncated(next_path)
        except OSError as e:
            logger.error(f"{self!r}: cannot open rotation segment '{next_path}': {e}")
            return failure(ErrorCode.IO_ERROR, f"rotation to '{next_path}' failed: {e}")

        previous = self._destination
        self._destination = stream
        self._path = next_path
        ctx.rotation_counter = next_counter
        ctx.bytes_since_rotation = 0

        try:
            previous.close()
        except OSError as e:
            logger.warning(f"{self!r}: closing previous segment failed: {e}")

        logger.debug(f"{self!r}: rotated to segment {next_counter}")
        return None
