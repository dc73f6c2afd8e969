from __future__ import annotations

"""
Log Record Data Model.

A record is the immutable snapshot of one log event. It is created per
log call, consumed synchronously by the dispatch pipeline and never
retained by a handler after publishing.
"""

from dataclasses import dataclass

from chainlog.domain.levels import Level


@dataclass(frozen=True)
class Record:
    """
    One log event.

    Attributes:
        name: Name of the logger that produced the event.
        level: Severity of the event.
        file: Source file of the call site.
        line: Source line of the call site.
        function: Enclosing function of the call site.
        timestamp: Event time as seconds since the epoch.
        message: Fully rendered message text.
    """
    name: str
    level: Level
    file: str
    line: int
    function: str
    timestamp: float
    message: str
