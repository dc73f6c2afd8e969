from __future__ import annotations

"""
Diagnostics Configuration Model.

Configures how chainlog reports its own internal events (rotations,
handler failures, chain mutations) through the standard library logging
module. This is independent of the loggers chainlog builds for callers.
"""

import logging
from dataclasses import dataclass
from typing import Dict

# Name of the stdlib logger hierarchy used by the library's own modules
DIAGNOSTICS_LOGGER_NAME: str = "chainlog"

# Mapping of string identifiers to native logging constants
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class DiagnosticsConfig:
    """
    Immutable settings for the library's self-diagnostics.

    Attributes:
        level: Minimum severity of internal events to report.
        console: Flag to enable stderr output of internal events.
        fmt: Structural format of diagnostic lines.
    """
    level: str = "WARNING"
    console: bool = True
    fmt: str = "chainlog[%(levelname)s] %(name)s: %(message)s"
