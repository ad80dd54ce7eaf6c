"""CLI entry point for staticsync.

Usage:
    python -m staticsync [-c CONFIG] [run] [-t SECONDS] [-b BYTES] [--once]
    python -m staticsync [-c CONFIG] status [--json]
    python -m staticsync [-c CONFIG] check-config

Commands:
    run           Keep all configured pairs in sync (default)
    status        Show what the next pass would do, without changing files
    check-config  Validate the config file and list its pairs
"""

import argparse
import json
import logging
import signal
import sys
from typing import List, Optional

from staticsync import __version__
from staticsync.config import SyncConfig, default_config_path, load_config
from staticsync.exceptions import ConfigError, ReconcileError
from staticsync.sync.reconciler import Reconciler
from staticsync.sync.scheduler import Scheduler
from staticsync.utils.hashing import ALGORITHMS, ContentDigester
from staticsync.utils.logging import configure_root_logger

logger = logging.getLogger("staticsync")


def setup_logging(args: argparse.Namespace) -> None:
    """Configure logging for CLI output."""
    configure_root_logger(
        level=logging.DEBUG if args.verbose else logging.INFO,
        json_output=args.json_logs,
        log_file=args.log_file,
    )


def load_settings(args: argparse.Namespace) -> SyncConfig:
    """Load the config file and apply command line overrides.

    Raises:
        ConfigError: If the config file or an override is invalid
    """
    logger.info(f'Loading config "{args.config}"...')
    config = load_config(args.config)
    return config.with_overrides(
        interval=args.time,
        buffer_size=args.buffer_size,
        algorithm=args.algorithm,
        run_once=args.once or None,
        verbose=args.verbose or None,
        json_logs=args.json_logs or None,
        log_file=args.log_file,
    )


def build_reconciler(config: SyncConfig) -> Reconciler:
    return Reconciler(ContentDigester(config.buffer_size, config.algorithm))


def cmd_run(args: argparse.Namespace) -> int:
    """Handle the 'run' command - reconcile all pairs on an interval.

    Args:
        args: Parsed CLI arguments

    Returns:
        Exit code (0 if the last pass had no failures, 1 otherwise)
    """
    config = load_settings(args)
    scheduler = Scheduler(config.pairs, build_reconciler(config), interval=config.interval)

    def _request_stop(signum, frame):
        logger.info(f"Received signal {signum}, finishing current pass")
        scheduler.stop()

    previous = {
        signum: signal.signal(signum, _request_stop)
        for signum in (signal.SIGINT, signal.SIGTERM)
    }

    logger.info(
        f"Watching {len(config.pairs)} pair(s) every {config.interval:g}s "
        f"(buffer {config.buffer_size} bytes, {config.algorithm})"
    )
    try:
        stats = scheduler.run(run_once=config.run_once)
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)

    return 0 if stats.success else 1


def cmd_status(args: argparse.Namespace) -> int:
    """Handle the 'status' command - dry run of a single pass.

    Args:
        args: Parsed CLI arguments

    Returns:
        Exit code (0 if every pair could be inspected, 1 otherwise)
    """
    config = load_settings(args)
    reconciler = build_reconciler(config)

    results = []
    failed = 0
    for pair in config.pairs:
        try:
            results.append(reconciler.inspect(pair).to_dict())
        except ReconcileError as e:
            failed += 1
            results.append({
                "action": "error",
                "side_a": str(pair.side_a),
                "side_b": str(pair.side_b),
                "error": str(e),
            })

    if args.json:
        print(json.dumps(results, indent=2))
    else:
        for result in results:
            print(f"{result['side_a']} vs {result['side_b']}")
            if result["action"] == "error":
                print(f"    Error: {result['error']}")
            elif result["action"] == "unchanged":
                print("    Files are the same!")
            elif result["action"] == "noop_same_content":
                print(f"    Same content, would retime {result['target']}")
            else:
                print(f"    Would replace {result['target']} with {result['source']}")

    return 0 if failed == 0 else 1


def cmd_check_config(args: argparse.Namespace) -> int:
    """Handle the 'check-config' command - validate and list pairs.

    Args:
        args: Parsed CLI arguments

    Returns:
        Exit code (0 for a valid config)
    """
    config = load_settings(args)
    print(f"Config OK: {len(config.pairs)} pair(s)")
    for index, pair in enumerate(config.pairs, start=1):
        print(f"  #{index} {pair}")
    print(f"  Interval: {config.interval:g}s")
    print(f"  Buffer size: {config.buffer_size} bytes")
    print(f"  Algorithm: {config.algorithm}")
    return 0


def _add_digest_options(parser: argparse.ArgumentParser, default=None) -> None:
    parser.add_argument(
        "-b", "--buffer-size", type=int, metavar="BYTES", default=default,
        help="Read buffer size used for hashing"
    )
    parser.add_argument(
        "--algorithm", choices=sorted(ALGORITHMS), default=default,
        help="Digest algorithm (default: xxhash)"
    )


def _add_run_options(parser: argparse.ArgumentParser, default=None) -> None:
    _add_digest_options(parser, default)
    parser.add_argument(
        "-t", "--time", type=float, metavar="SECONDS", default=default,
        help="Interval between checks in seconds (default: 10)"
    )
    parser.add_argument(
        "--once", action="store_true",
        default=False if default is None else default,
        help="Run a single pass and exit"
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    The 'run' options are registered on the top-level parser too, since
    'run' is the default command. Subcommands register theirs with
    SUPPRESS defaults so an option given before the command name is not
    reset by the subcommand.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="staticsync",
        description="Keep pairs of files in sync, newest modification time wins",
    )
    parser.add_argument(
        "--version", action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable verbose output"
    )
    parser.add_argument(
        "-c", "--config", default=str(default_config_path()), metavar="PATH",
        help="Path to a configuration file (default: ~/.staticsync.json)"
    )
    parser.add_argument("--json-logs", action="store_true", help="Log as JSON lines")
    parser.add_argument("--log-file", metavar="PATH", help="Also write logs to this file")
    _add_run_options(parser)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Keep pairs in sync (default)")
    status_parser = subparsers.add_parser("status", help="Show what the next pass would do")
    check_parser = subparsers.add_parser("check-config", help="Validate the config file")

    _add_run_options(run_parser, default=argparse.SUPPRESS)
    _add_digest_options(status_parser, default=argparse.SUPPRESS)
    _add_digest_options(check_parser, default=argparse.SUPPRESS)

    status_parser.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args)

    commands = {
        None: cmd_run,
        "run": cmd_run,
        "status": cmd_status,
        "check-config": cmd_check_config,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
