from __future__ import annotations

"""
Logger Configuration Models and Factory.

Defines the immutable configuration of a fully wired logger, its loading
from JSON documents and the factory that turns it into a Logger with
console, file or rotating-file handlers.
"""

import json
import logging
import sys
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Mapping, Optional

from chainlog.core.formatters import DEFAULT_DATEFMT, TemplateFormatter
from chainlog.core.handlers import FileHandler, Handler, RotatingFileHandler, StreamHandler
from chainlog.core.logger import Logger
from chainlog.domain.levels import Level

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a configuration document is malformed."""

# -----------------------------------------------------------------------------
# CONFIGURATION MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LoggerConfig:
    """
    Immutable specification of a logger and its handlers.

    Attributes:
        name: Logger name stamped on records.
        level: Logger threshold.
        console: Attach a stderr stream handler.
        console_level: Threshold of the console handler.
        log_file: Optional file path. Enables a file handler.
        file_level: Threshold of the file handler.
        rotate_bytes: When set with log_file, segments rotate at this size.
        console_fmt: Template for console output.
        file_fmt: Template for file output.
        datefmt: strftime format for %(asctime)s.
    """
    name: str = "chainlog"
    level: str = "INFO"
    console: bool = True
    console_level: str = "DEBUG"
    log_file: Optional[str] = None
    file_level: str = "DEBUG"

    rotate_bytes: Optional[int] = None

    console_fmt: str = "%(levelname)s | %(message)s\n"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s\n"
    datefmt: str = DEFAULT_DATEFMT

# -----------------------------------------------------------------------------
# LOADING AND VALIDATION
# -----------------------------------------------------------------------------

_LEVEL_KEYS = ("level", "console_level", "file_level")
_STR_KEYS = ("name", "console_fmt", "file_fmt", "datefmt")


def config_from_dict(data: Mapping[str, Any], base: Optional[LoggerConfig] = None) -> LoggerConfig:
    """
    Validate a mapping and merge it over a base configuration.

    Unknown keys are ignored with a warning. None values keep the base value.

    Args:
        data: Raw configuration values.
        base: Configuration to override. Defaults to LoggerConfig().

    Returns:
        LoggerConfig: The merged, validated configuration.

    Raises:
        ConfigError: On wrong types, unknown levels or negative sizes.
    """
    if not isinstance(data, Mapping):
        raise ConfigError(f"Configuration must be an object, got {type(data).__name__}")

    known = {f.name for f in fields(LoggerConfig)}
    overrides: Dict[str, Any] = {}

    for key, value in data.items():
        if key not in known:
            logger.warning(f"Ignoring unknown configuration key '{key}'")
            continue
        if value is None and key not in ("log_file", "rotate_bytes"):
            continue
        overrides[key] = _validate_value(key, value)

    return replace(base or LoggerConfig(), **overrides)


def load_config(path: str, base: Optional[LoggerConfig] = None) -> LoggerConfig:
    """
    Read a JSON configuration file.

    Args:
        path: JSON document path.
        base: Configuration to override.

    Returns:
        LoggerConfig: The loaded configuration.

    Raises:
        ConfigError: If the file cannot be read or parsed, or is invalid.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot load configuration '{path}': {e}") from e
    return config_from_dict(data, base)


def config_to_dict(cfg: LoggerConfig) -> Dict[str, Any]:
    return asdict(cfg)


def _validate_value(key: str, value: Any) -> Any:
    if key in _LEVEL_KEYS:
        try:
            return Level.parse(value).name
        except ValueError as e:
            raise ConfigError(f"'{key}': {e}") from e

    if key == "console":
        if not isinstance(value, bool):
            raise ConfigError(f"'{key}' must be a boolean")
        return value

    if key == "rotate_bytes":
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(f"'{key}' must be a non-negative integer")
        return value

    if key == "log_file":
        if value is None:
            return None
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"'{key}' must be a non-empty string")
        return value

    if key in _STR_KEYS and not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string")
    return value

# -----------------------------------------------------------------------------
# LOGGER FACTORY
# -----------------------------------------------------------------------------

def build_logger(cfg: LoggerConfig) -> Logger:
    """
    Construct a Logger with the handlers described by the configuration.

    The file handler is added first and the console handler last, so the
    console is offered each record first. If a handler cannot be built,
    the ones already built are closed before the error propagates.

    Args:
        cfg: Logger configuration.

    Returns:
        Logger: The wired logger.

    Raises:
        OSError: If the log file cannot be opened.
    """
    log = Logger(cfg.name, Level.parse(cfg.level))
    built: List[Handler] = []

    try:
        if cfg.log_file:
            file_formatter = TemplateFormatter(cfg.file_fmt, cfg.datefmt)
            if cfg.rotate_bytes is not None:
                fh: Handler = RotatingFileHandler(
                    cfg.log_file,
                    Level.parse(cfg.file_level),
                    file_formatter,
                    threshold_bytes=cfg.rotate_bytes,
                )
            else:
                fh = FileHandler(cfg.log_file, Level.parse(cfg.file_level), file_formatter)
            built.append(fh)

        if cfg.console:
            sh = StreamHandler(
                sys.stderr,
                Level.parse(cfg.console_level),
                TemplateFormatter(cfg.console_fmt, cfg.datefmt),
            )
            built.append(sh)
    except Exception:
        for h in built:
            h.close()
        raise

    for h in built:
        log.add_handler(h)

    logger.debug(f"Built {log!r} from configuration")
    return log
