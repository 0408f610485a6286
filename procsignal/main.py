#!/usr/bin/env python3
"""
procsignal - Signal processes by name

Looks up every process whose name matches NAME in the process-information
filesystem and sends it SIGNAL. Used to restart or stop a helper process
without knowing its PID.

Usage:
    procsignal NAME SIGNAL [--proc-root DIR] [--config FILE]

Environment:
    HOST_PROC   process-information root (default /proc)
"""

import argparse
import signal
import sys
from typing import Optional

from .config import ConfigError, Settings, load_config
from .core import signal_procs
from .utils.logging_config import setup_logging


def parse_signal(value: str) -> int:
    """Accept ``15``, ``TERM`` or ``SIGTERM`` (any case)."""
    if value.isdigit():
        return int(value)
    name = value.upper()
    if not name.startswith("SIG"):
        name = "SIG" + name
    try:
        return int(signal.Signals[name])
    except KeyError:
        raise argparse.ArgumentTypeError(f"unknown signal: {value}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="procsignal",
        description="Send a signal to every process with the given name."
    )
    parser.add_argument("name", help="Process name to match exactly")
    parser.add_argument("signal", type=parse_signal, help="Signal number or name (e.g. 15, TERM)")
    parser.add_argument("--proc-root", default=None, help="Process-information root (overrides HOST_PROC)")
    parser.add_argument("--config", default=None, help="YAML config file")
    parser.add_argument(
        "--ignore-vanished",
        action="store_true",
        default=None,
        help="Skip processes that exit while their name is being read",
    )
    parser.add_argument("--log-level", default=None, help="Console log level (DEBUG, INFO, WARNING, ERROR)")
    parser.add_argument("--log-file", default=None, help="Write a detailed log to this file")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for procsignal."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_config(args.config) if args.config else Settings()
        if args.proc_root is not None:
            settings.proc_root = args.proc_root
        if args.ignore_vanished is not None:
            settings.ignore_vanished = args.ignore_vanished
        if args.log_level is not None:
            settings.log_level = args.log_level
        if args.log_file is not None:
            settings.log_file = args.log_file
        level = settings.level
    except ConfigError as e:
        parser.error(str(e))

    logger = setup_logging(level, settings.log_file)

    try:
        signaled = signal_procs(
            args.name,
            args.signal,
            root=settings.proc_root,
            ignore_vanished=settings.ignore_vanished,
        )
    except OSError as e:
        logger.error(f"Failed to signal {args.name!r}: {e}")
        return 1

    logger.info(f"Signaled {len(signaled)} process(es) named {args.name!r}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
