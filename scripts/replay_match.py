from __future__ import annotations

import asyncio

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))
from core.logging.config import bootstrap_logging, shutdown_logging
from config import settings
from domain.errors import ConfigurationError
from presentation.cli import ReplayCommand


def main(argv: list[str]) -> int:
    if not argv:
        print("usage: replay_match.py MATCH_ID [--send]", file=sys.stderr)
        return 2
    bootstrap_logging(service="replay", level=settings.LOG_LEVEL, log_dir=settings.LOG_DIR, log_file_name="replay.jsonl")
    try:
        return asyncio.run(ReplayCommand(argv[0], send="--send" in argv[1:]).run())
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    finally:
        shutdown_logging()


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
