from __future__ import annotations

"""
Diagnostics Handler Utilities.

Tags the stdlib handlers created by this package so that reconfiguration
only ever removes its own handlers, never ones injected by the host
application.
"""

import logging
import sys
from typing import Optional, TextIO

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_chainlog_diagnostics_handler"


def _tag_handler(handler: logging.Handler) -> None:
    """
    Mark a handler as managed by the diagnostics module.

    Args:
        handler: The logging handler instance to tag.
    """
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_console_handler(
        level_int: int,
        formatter: logging.Formatter,
        stream: Optional[TextIO] = None,
) -> logging.StreamHandler:
    """
    Build a tagged stderr handler for diagnostic output.

    Args:
        level_int: Numeric logging level.
        formatter: Pre-configured logging formatter.
        stream: Target stream. Defaults to sys.stderr.

    Returns:
        logging.StreamHandler: Configured handler.
    """
    sh = logging.StreamHandler(stream or sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(formatter)
    _tag_handler(sh)
    return sh
