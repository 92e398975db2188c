"""Command-line entry point.

Without a subcommand, opens the interactive session browser. Subcommands:

    ls        table of all sessions
    context   context-window fill of the main session
    models    models known to the session store
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from session_usage import __version__
from session_usage.config import get_settings
from session_usage.utils.logger import setup_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="session-usage",
        description="Browse per-session token usage from the session store.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--store", type=Path, help="Path to the session store (overrides config).")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug details.")
    parser.add_argument("--log-file", type=Path, help="Append logs to this file instead of stderr.")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("ls", help="List sessions, most recently updated first.")

    context = subparsers.add_parser("context", help="Show the main session's context-window fill.")
    context.add_argument("--key", help="Session key to use when there is no 'main' session.")
    context.add_argument("--width", type=int, default=30, help="Width of the usage bar.")

    subparsers.add_parser("models", help="List models known to the session store.")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = _build_parser().parse_args(argv)
    settings = get_settings()

    level = "DEBUG" if args.verbose else settings.log_level
    log_file = args.log_file or settings.log_file
    if args.command is None and log_file is None:
        # Nothing may write to the terminal while curses owns it
        level = "CRITICAL"
    setup_logging(level, log_file)

    if args.command == "ls":
        from session_usage.commands import ls
        ls.run(args.store)
    elif args.command == "context":
        from session_usage.commands import context
        context.run(args.store, key=args.key, width=args.width)
    elif args.command == "models":
        from session_usage.commands import models
        models.run(args.store)
    else:
        from session_usage.tui import app
        app.run(args.store)


if __name__ == "__main__":
    main()
