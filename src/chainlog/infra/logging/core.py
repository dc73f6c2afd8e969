from __future__ import annotations

"""
Diagnostics Lifecycle.

Idempotent setup of the stdlib logger that carries chainlog's internal
events. Entry points (the CLI) call configure_diagnostics() and
get_logger(); library modules keep a module-level
logging.getLogger(__name__), which lands under the same "chainlog" logger.
"""

import logging
from typing import Optional, TextIO

from chainlog.infra.logging.config import (
    _LEVEL_MAP,
    DIAGNOSTICS_LOGGER_NAME,
    DiagnosticsConfig,
)
from chainlog.infra.logging.handlers import _create_console_handler, _is_our_handler

# Internal state flag for idempotency
_CONFIGURED_FLAG_ATTR: str = "_chainlog_diagnostics_configured"

# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_diagnostics(
        cfg: DiagnosticsConfig,
        *,
        force: bool = False,
        stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the ``chainlog`` stdlib logger.

    Repeated calls are no-ops unless ``force`` is set, in which case the
    handlers previously attached by this function are removed first.

    Args:
        cfg: Diagnostics settings.
        force: Re-initialize even if already configured.
        stream: Console stream override. Defaults to sys.stderr.

    Returns:
        logging.Logger: The diagnostics logger.
    """
    diag = logging.getLogger(DIAGNOSTICS_LOGGER_NAME)

    already_configured = bool(getattr(diag, _CONFIGURED_FLAG_ATTR, False))
    if already_configured and not force:
        return diag

    level_int = _parse_level(cfg.level)
    diag.setLevel(level_int)
    _remove_our_handlers(diag)

    if cfg.console:
        diag.addHandler(_create_console_handler(level_int, logging.Formatter(cfg.fmt), stream))

    setattr(diag, _CONFIGURED_FLAG_ATTR, True)
    return diag


def reset_diagnostics() -> None:
    """Detach our handlers and clear the configured flag."""
    diag = logging.getLogger(DIAGNOSTICS_LOGGER_NAME)
    _remove_our_handlers(diag)
    diag.setLevel(logging.NOTSET)
    setattr(diag, _CONFIGURED_FLAG_ATTR, False)


def get_logger(name: str) -> logging.Logger:
    """
    Acquire a stdlib logger for internal diagnostics.

    Args:
        name: Hierarchical name (usually __name__).

    Returns:
        logging.Logger: The requested logger instance.
    """
    return logging.getLogger(name)

# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def _remove_our_handlers(diag: logging.Logger) -> None:
    """Detach and close every handler this module attached."""
    for h in list(diag.handlers):
        if _is_our_handler(h):
            diag.removeHandler(h)
            h.close()
