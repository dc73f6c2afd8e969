from __future__ import annotations

"""
Message Construction.

Builds the final message text of a log call from a printf-style format
string and its arguments.
"""

from typing import Any, Tuple


def build_message(fmt: str, args: Tuple[Any, ...] = ()) -> str:
    """
    Render a printf-style format string.

    The format string is used verbatim when no arguments are given, so
    literal '%' characters in plain messages need no escaping.

    Args:
        fmt: printf-style format string.
        args: Positional arguments. A single mapping enables %(key)s lookups.

    Returns:
        str: The rendered message.

    Raises:
        MemoryError: If the message cannot be allocated.
        TypeError, ValueError, KeyError: If format and arguments do not match.
    """
    if not args:
        return str(fmt)
    if len(args) == 1 and isinstance(args[0], dict):
        return str(fmt) % args[0]
    return str(fmt) % args
