from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: diagnostics bootstrap, resolution of the
configuration (file plus command-line overrides), logger construction
and publishing of every input message. Stops at the first failed publish.
"""

import json
import sys
from typing import Iterator, List, Optional, TextIO, Tuple

from chainlog.config import (
    ConfigError,
    LoggerConfig,
    build_logger,
    config_from_dict,
    config_to_dict,
    load_config,
)
from chainlog.core.logger import Logger
from chainlog.domain.levels import Level
from chainlog.infra.logging import DiagnosticsConfig, configure_diagnostics, get_logger
from chainlog.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_PUBLISH_FAILED = 1
EXIT_BAD_CONFIG = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv.
        stdin: Input stream used when no messages are given. Defaults to sys.stdin.

    Returns:
        int: Process exit code.
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Diagnostics bootstrap
    diag_level = "DEBUG" if args.debug else "WARNING"
    configure_diagnostics(DiagnosticsConfig(level=diag_level), force=True)

    # 3. Configuration resolution
    try:
        cfg = _resolve_config(args.config_path, cli_args.args_to_overrides(args))
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_BAD_CONFIG

    if args.dump_config:
        print(json.dumps(config_to_dict(cfg), ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4. Logger construction
    try:
        log = build_logger(cfg)
    except OSError as e:
        print(f"ERROR: cannot open log destination: {e}", file=sys.stderr)
        return EXIT_BAD_CONFIG

    # 5. Publishing phase
    record_level = Level.parse(args.record_level)
    source = "<argv>" if args.messages else "<stdin>"
    lines = _iter_messages(args.messages, stdin if stdin is not None else sys.stdin)

    try:
        with log:
            return _publish_all(log, record_level, source, lines)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED

# -----------------------------------------------------------------------------
# WORKFLOW STEPS
# -----------------------------------------------------------------------------

def _resolve_config(config_path: Optional[str], overrides: dict) -> LoggerConfig:
    """Merge command-line overrides over the file (or default) configuration."""
    base = load_config(config_path) if config_path else LoggerConfig()
    return config_from_dict(overrides, base)


def _publish_all(
        log: Logger,
        level: Level,
        source: str,
        lines: Iterator[Tuple[int, str]],
) -> int:
    """
    Log every message; stop at the first failure.

    Returns:
        int: EXIT_OK, or EXIT_PUBLISH_FAILED with the failure on stderr.
    """
    count = 0
    for line_no, text in lines:
        result = log.log(level, text, file=source, line=line_no, function="main")
        if not result.ok:
            print(
                f"ERROR: publishing message {line_no} failed "
                f"({result.error.name}): {result.detail}",
                file=sys.stderr,
            )
            return EXIT_PUBLISH_FAILED
        count += 1

    logger.debug(f"Published {count} message(s) through {log!r}")
    return EXIT_OK


def _iter_messages(messages: List[str], stdin: TextIO) -> Iterator[Tuple[int, str]]:
    """Yield (1-based index, text) pairs, skipping blank stdin lines."""
    if messages:
        for i, msg in enumerate(messages, start=1):
            yield i, msg
        return

    for i, raw in enumerate(stdin, start=1):
        text = raw.rstrip("\r\n")
        if text:
            yield i, text

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
