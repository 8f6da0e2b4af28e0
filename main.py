"""Main CLI entry-point."""
from __future__ import annotations

import argparse
import asyncio
import shutil
import sys

from core.logging.config import bootstrap_logging, shutdown_logging
from config import settings
from domain.errors import ConfigurationError

_BRIGHT_GREEN = "\033[1;92m"
_CYAN = "\033[96m"
_RED = "\033[91m"
_RESET = "\033[0m"


def _g(s: str) -> str:
    return f"{_BRIGHT_GREEN}{s}{_RESET}"


def _c(s: str) -> str:
    return f"{_CYAN}{s}{_RESET}"


def _print_banner() -> None:
    cols = shutil.get_terminal_size(fallback=(96, 20)).columns
    div = "═" * min(cols, 64)
    print(_g(div))
    print(_g("  DOTA 2 MATCH NOTIFIER"))
    print(_c(f"  Tracking {settings.TRACKED_PLAYER_NAME} ({settings.PLAYER_ID or 'unset'})"))
    print(_g(div))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="main.py", description="Posts a Dota 2 player's new matches to Discord.")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("run", help="start the notifier (default)")
    replay = sub.add_parser("replay", help="build the announcement for one match")
    replay.add_argument("match_id")
    replay.add_argument("--send", action="store_true", help="also post it to the Discord channel")
    return parser


def _command(args: argparse.Namespace):
    # Lazy imports keep `--help` free of the HTTP stack
    from presentation.cli import NotifierCommand, ReplayCommand

    if args.command == "replay":
        return ReplayCommand(args.match_id, send=args.send)
    return ReplayCommand.from_settings() or NotifierCommand()


def main(argv: list[str]) -> int:
    args = build_parser().parse_args(argv)
    bootstrap_logging(
        service="notifier",
        level=settings.LOG_LEVEL,
        log_dir=settings.LOG_DIR,
        log_file_name="notifier.jsonl",
    )
    try:
        _print_banner()
        return asyncio.run(_command(args).run())
    except ConfigurationError as exc:
        print(f"{_RED}Configuration error: {exc}{_RESET}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        return 0
    finally:
        shutdown_logging()


def _entry() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(_entry())
