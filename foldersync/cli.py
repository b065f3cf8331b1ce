"""
Command-Line Interface

foldersync SOURCE REPLICA INTERVAL LOG_FILE [options]

Author: foldersync Project
License: MIT
"""

import argparse
import signal
import sys
from typing import List, Optional

from . import __version__
from .config import ConfigLoader, HashAlgorithm, LogLevel
from .core import Orchestrator
from .utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="foldersync",
        description="Periodically mirror a source directory into a replica directory."
    )
    parser.add_argument("source", help="Source directory path")
    parser.add_argument("replica", help="Replica directory path")
    parser.add_argument("interval", type=int, help="Synchronization interval in whole seconds")
    parser.add_argument("log_file", help="Log file path")
    parser.add_argument("--config", help="Optional YAML configuration file")
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        type=str.upper,
        help="Logging level (default: INFO)"
    )
    parser.add_argument(
        "--hash-algorithm",
        choices=[algorithm.value for algorithm in HashAlgorithm],
        type=str.lower,
        help="Content checksum algorithm (default: sha256)"
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=None,
        help="Write log records as JSON"
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single synchronization pass and exit"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point.

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {
        "sync": {
            "source_path": args.source,
            "replica_path": args.replica,
            "hash_algorithm": args.hash_algorithm
        },
        "scheduling": {
            "interval_seconds": args.interval
        },
        "logging": {
            "log_file_path": args.log_file,
            "log_level": args.log_level,
            "json_format": args.json_logs
        }
    }

    try:
        config = ConfigLoader(args.config).load(overrides)
    except ValueError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: invalid configuration: {e}", file=sys.stderr)
        return 2

    setup_logging(
        log_level=config.logging.log_level,
        log_file_path=config.logging.log_file_path,
        log_to_console=config.logging.log_to_console,
        log_rotation_size=config.logging.log_rotation_size,
        log_retention_count=config.logging.log_retention_count,
        json_format=config.logging.json_format
    )

    orchestrator = Orchestrator(config)

    if args.once:
        return 0 if orchestrator.run_pass() is not None else 1

    signal.signal(signal.SIGTERM, lambda signum, frame: orchestrator.stop())

    try:
        orchestrator.run_forever()
    except KeyboardInterrupt:
        logger.info("Synchronization stopped by user")
        orchestrator.stop()

    return 0


if __name__ == "__main__":
    sys.exit(main())
