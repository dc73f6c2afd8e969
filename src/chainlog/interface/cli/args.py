from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the ``chainlog`` tool and translates
parsed namespaces into configuration overrides.
"""

import argparse
from typing import Any, Dict, List

_LEVEL_CHOICES: List[str] = ["DEBUG", "INFO", "WARNING", "WARN", "ERROR", "FATAL", "CRITICAL"]

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the chainlog CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="chainlog",
        description=(
            "Publish messages (arguments, or stdin lines) through a leveled "
            "logger with console, file or rotating-file handlers."
        ),
    )

    p.add_argument(
        "messages",
        nargs="*",
        help="Messages to log. When omitted, stdin is read line by line.",
    )

    # --- Configuration Sources ---
    p.add_argument(
        "-c", "--config",
        dest="config_path",
        default=None,
        help="JSON configuration file; command-line options override it.",
    )
    p.add_argument(
        "-n", "--name",
        default=None,
        help="Logger name stamped on every record.",
    )

    # --- Thresholds ---
    p.add_argument(
        "-l", "--level",
        type=str.upper,
        choices=_LEVEL_CHOICES,
        default=None,
        help="Logger threshold.",
    )
    p.add_argument(
        "-r", "--record-level",
        dest="record_level",
        type=str.upper,
        choices=_LEVEL_CHOICES,
        default="INFO",
        help="Level of the records emitted for each message (default: INFO).",
    )

    # --- Destinations ---
    p.add_argument(
        "-f", "--file",
        dest="log_file",
        default=None,
        help="Write records to this file.",
    )
    p.add_argument(
        "--rotate-bytes",
        dest="rotate_bytes",
        type=int,
        default=None,
        help="Rotate the log file into numbered segments at this size.",
    )
    p.add_argument(
        "--no-console",
        action="store_true",
        help="Disable the stderr handler.",
    )
    p.add_argument(
        "--format",
        dest="fmt",
        default=None,
        help="Record template for every handler, e.g. '%%(levelname)s %%(message)s'.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Report chainlog's internal events at DEBUG level.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only options the user actually supplied are included.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.name is not None:
        overrides["name"] = args.name
    if args.level is not None:
        overrides["level"] = args.level
    if args.log_file is not None:
        overrides["log_file"] = args.log_file
    if args.rotate_bytes is not None:
        overrides["rotate_bytes"] = args.rotate_bytes
    if args.no_console:
        overrides["console"] = False

    if args.fmt is not None:
        fmt = _with_newline(args.fmt)
        overrides["console_fmt"] = fmt
        overrides["file_fmt"] = fmt

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _with_newline(fmt: str) -> str:
    """Templates are written verbatim; make sure each record ends its line."""
    return fmt if fmt.endswith("\n") else fmt + "\n"
