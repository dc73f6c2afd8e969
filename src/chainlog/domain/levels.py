from __future__ import annotations

"""
Severity Level Definitions.

Provides the totally ordered severity scale shared by loggers, handlers
and records, together with the text parsing rules used by configuration
files and the command line.
"""

from enum import IntEnum
from typing import Dict, Union


class Level(IntEnum):
    """
    Ordered severity scale. Numeric values follow the stdlib convention.
    """
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    FATAL = 50

    # Alias kept for sources that spell it the short way
    WARN = 30

    @classmethod
    def parse(cls, value: Union[str, int, "Level"]) -> Level:
        """
        Resolve a level from its name, its numeric value or a Level member.

        Args:
            value: Case-insensitive level name ("warn", "CRITICAL", ...) or int.

        Returns:
            Level: The matching member.

        Raises:
            ValueError: If the value does not name a known level.
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"Unknown level value: {value}") from None

        key = str(value or "").strip().upper()
        if key not in _LEVEL_MAP:
            raise ValueError(f"Unknown level name: {value!r}")
        return _LEVEL_MAP[key]


MIN_LEVEL: Level = Level.DEBUG
MAX_LEVEL: Level = Level.FATAL

# Mapping of string identifiers to levels, including tolerated aliases
_LEVEL_MAP: Dict[str, Level] = {
    "DEBUG": Level.DEBUG,
    "INFO": Level.INFO,
    "WARNING": Level.WARNING,
    "WARN": Level.WARNING,
    "ERROR": Level.ERROR,
    "FATAL": Level.FATAL,
    "CRITICAL": Level.FATAL,
}


def check_level(level: Union[int, Level]) -> Level:
    """
    Validate that a level lies inside [DEBUG, FATAL].

    Args:
        level: Candidate level.

    Returns:
        Level: The validated member.

    Raises:
        TypeError: If the value is not an integer level.
        ValueError: If it falls outside the supported range.
    """
    if isinstance(level, bool) or not isinstance(level, int):
        raise TypeError(f"Level must be an int or Level, got {type(level).__name__}")
    if not MIN_LEVEL <= level <= MAX_LEVEL:
        raise ValueError(f"Level {level} outside [{MIN_LEVEL.name}, {MAX_LEVEL.name}]")
    try:
        return Level(level)
    except ValueError:
        raise ValueError(f"Unknown level value: {level}") from None
