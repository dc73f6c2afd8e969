from __future__ import annotations

"""
Unit tests for Severity Levels.

Verifies:
1. Total ordering DEBUG < INFO < WARNING < ERROR < FATAL.
2. Name parsing, including aliases and case-insensitivity.
3. Range validation of level values.
"""

import pytest

from chainlog.domain.levels import MAX_LEVEL, MIN_LEVEL, Level, check_level


def test_levels_are_totally_ordered():
    """Verify the severity scale is strictly increasing."""
    ordered = [Level.DEBUG, Level.INFO, Level.WARNING, Level.ERROR, Level.FATAL]
    assert ordered == sorted(ordered)
    assert MIN_LEVEL is Level.DEBUG
    assert MAX_LEVEL is Level.FATAL


def test_warn_is_alias_of_warning():
    """WARN and WARNING must be the same member."""
    assert Level.WARN is Level.WARNING


@pytest.mark.parametrize("raw, expected", [
    ("debug", Level.DEBUG),
    (" Info ", Level.INFO),
    ("warn", Level.WARNING),
    ("CRITICAL", Level.FATAL),
    (40, Level.ERROR),
    (Level.FATAL, Level.FATAL),
])
def test_parse_accepts_names_values_and_members(raw, expected):
    assert Level.parse(raw) is expected


@pytest.mark.parametrize("raw", ["verbose", "", None, 15, 99])
def test_parse_rejects_unknown_levels(raw):
    with pytest.raises(ValueError):
        Level.parse(raw)


def test_check_level_enforces_range():
    """Values outside [DEBUG, FATAL] or of the wrong type are rejected."""
    assert check_level(30) is Level.WARNING

    with pytest.raises(ValueError):
        check_level(0)
    with pytest.raises(ValueError):
        check_level(60)
    with pytest.raises(TypeError):
        check_level("INFO")
    with pytest.raises(TypeError):
        check_level(True)
