from __future__ import annotations

import argparse
import logging
import signal
import sys
from pathlib import Path
from typing import Optional

from .config import load_config
from .errors import ExportError
from .exporter import export_note
from .watcher import ChangeWatcher, TickOutcome


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the command-line parser for the exporter CLI."""

    parser = argparse.ArgumentParser(description="Export a Bear note into a TextBundle.")
    parser.add_argument("bear_link", nargs="?", help="Bear note link to process.")
    parser.add_argument("-o", "--output", help="Output path; .textbundle is appended if missing.")
    parser.add_argument("-w", "--watch", action="store_true", help="Keep re-exporting when the note changes.")
    parser.add_argument(
        "--env",
        default=".env",
        help="Path to the .env file with BEAR_SQLITE_PATH; a .env.local beside it is read as well.",
    )
    return parser


def run_cli(argv: Optional[list[str]] = None) -> int:
    """Entry point invoked by export_bear_note.py or tests. Returns the exit status."""

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.bear_link:
        print("Error: Bear link is required", file=sys.stderr)
        return 1
    if not args.output:
        print("Error: Output path is required (use -o or --output)", file=sys.stderr)
        return 1

    logger = configure_logging()

    env_path = Path(args.env)
    config = load_config((env_path, env_path.with_name(env_path.name + ".local")))

    print("[info] Processing Bear note...")
    try:
        result = export_note(args.bear_link, args.output, config)
    except ExportError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        logger.error("Export failed for %s: %s", args.bear_link, exc)
        return 1

    print(f"[info] Note exported to: {result.bundle_path}")

    if not args.watch:
        print("[info] Export completed successfully")
        return 0

    watcher = ChangeWatcher(result.record.identifier, args.output, config)

    # Ctrl+C only stops the schedule; a tick already writing is left to finish.
    previous_handler = signal.signal(signal.SIGINT, lambda signum, frame: watcher.stop())
    print("[info] Watching for changes... Press Ctrl+C to stop watching")
    try:
        for event in watcher.run():
            if event.changed:
                print(f"[info] Export updated: {event.bundle_path}")
            elif event.outcome is TickOutcome.FAILED:
                print(f"[warn] Watch error: {event.error}")
    finally:
        signal.signal(signal.SIGINT, previous_handler)
        watcher.stop()
    print("\n[info] Stopping watch mode...")
    logger.info("Watch mode stopped for %s", args.bear_link)
    return 0


LOG_PATH = Path(__file__).resolve().parent.parent / "export.log"
LOGGER_NAME = "bear_textbundle"


def configure_logging() -> logging.Logger:
    """Set up the package logger that writes to export.log."""

    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        logger.setLevel(logging.INFO)
        handler = logging.FileHandler(LOG_PATH, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(handler)
    return logger
