from __future__ import annotations

"""
Operation Result Models.

Every write-capable operation (handler publishing, logger dispatch)
reports its outcome through a single explicit result type instead of
raising. Allocation failures and I/O failures stay distinguishable
through the error code.
"""

from dataclasses import dataclass
from enum import Enum

# -----------------------------------------------------------------------------
# ERROR CODES
# -----------------------------------------------------------------------------

class ErrorCode(Enum):
    """
    Outcome categories of a publish or dispatch call.
    """
    OK = "ok"
    OUT_OF_MEMORY = "out_of_memory"
    IO_ERROR = "io_error"
    FORMAT_ERROR = "format_error"

# -----------------------------------------------------------------------------
# RESULT MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Result:
    """
    Unified outcome of a write-capable operation.

    Attributes:
        error: Outcome category; ErrorCode.OK on success.
        bytes_written: Bytes that reached the destination (may be partial on failure).
        content: Rendered text that was handed to the destination.
        detail: Human readable failure description.
    """
    error: ErrorCode = ErrorCode.OK
    bytes_written: int = 0
    content: str = ""
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is ErrorCode.OK

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def success(bytes_written: int = 0, content: str = "") -> Result:
    """
    Create a successful result.

    Args:
        bytes_written: Number of bytes written to the destination.
        content: The rendered text.

    Returns:
        Result: An immutable success result.
    """
    return Result(ErrorCode.OK, bytes_written, content)


def failure(
        error: ErrorCode,
        detail: str = "",
        bytes_written: int = 0,
        content: str = "",
) -> Result:
    """
    Create a failed result.

    Args:
        error: Failure category (must not be ErrorCode.OK).
        detail: Description of what went wrong.
        bytes_written: Partial byte count, if any reached the destination.
        content: The rendered text, when rendering succeeded.

    Returns:
        Result: An immutable failure result.
    """
    if error is ErrorCode.OK:
        raise ValueError("failure() requires a non-OK error code")
    return Result(error, bytes_written, content, detail)
