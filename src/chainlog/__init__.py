from __future__ import annotations

"""
chainlog: leveled logging with ordered handler chains and size-based
file rotation.
"""

import logging

from .config import ConfigError, LoggerConfig, build_logger, config_from_dict, load_config
from .core.formatters import CallableFormatter, Formatter, TemplateFormatter
from .core.handlers import (
    FileHandler,
    Handler,
    RotatingContext,
    RotatingFileHandler,
    StreamHandler,
)
from .core.logger import Logger
from .domain.levels import Level
from .domain.record import Record
from .domain.result import ErrorCode, Result

# Silent unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "Logger",
    "Level",
    "Record",
    "Result",
    "ErrorCode",
    "Formatter",
    "TemplateFormatter",
    "CallableFormatter",
    "Handler",
    "StreamHandler",
    "FileHandler",
    "RotatingFileHandler",
    "RotatingContext",
    "LoggerConfig",
    "ConfigError",
    "build_logger",
    "config_from_dict",
    "load_config",
]
