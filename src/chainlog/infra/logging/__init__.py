from __future__ import annotations

from .config import DIAGNOSTICS_LOGGER_NAME, DiagnosticsConfig
from .core import configure_diagnostics, get_logger, reset_diagnostics
from .handlers import _HANDLER_TAG_ATTR

__all__ = [
    "DiagnosticsConfig",
    "DIAGNOSTICS_LOGGER_NAME",
    "configure_diagnostics",
    "reset_diagnostics",
    "get_logger",
    "_HANDLER_TAG_ATTR",
]
