from __future__ import annotations

from .base import Handler
from .rotating import DEFAULT_THRESHOLD_BYTES, RotatingContext, RotatingFileHandler
from .stream import DEFAULT_ENCODING, FileHandler, StreamHandler

__all__ = [
    "Handler",
    "StreamHandler",
    "FileHandler",
    "RotatingFileHandler",
    "RotatingContext",
    "DEFAULT_ENCODING",
    "DEFAULT_THRESHOLD_BYTES",
]
