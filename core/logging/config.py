from __future__ import annotations

import logging
import os
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import Queue
from typing import Optional

from .context import get_context
from .formatter import ConsoleFormatter, JSONFormatter
from .levels import register_levels, to_level

_listener: QueueListener | None = None


class _ServiceFilter(logging.Filter):
    """Stamp records with the process-wide service tag and the caller's bound context.

    The context is captured here because queued records are formatted on the
    listener thread, where the context variable is empty.
    """

    def __init__(self, service: str) -> None:
        super().__init__()
        self.service = service

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "service", None) is None:
            record.service = self.service
        if not hasattr(record, "log_context"):
            record.log_context = get_context()
        return True


def bootstrap_logging(
    *,
    service: str = "notifier",
    level: str | int | None = None,
    log_dir: Optional[Path] = None,
    log_file_name: str = "notifier.jsonl",
    max_bytes: int = 5_000_000,
    backup_count: int = 5,
) -> None:
    """Console + rotating JSON-lines logging for a long-running daemon."""
    global _listener
    shutdown_logging()
    register_levels()
    root = logging.getLogger()
    root.handlers.clear()
    lvl = to_level(level or os.getenv("LOG_LEVEL", "INFO"))
    root.setLevel(lvl)
    service_filter = _ServiceFilter(service)

    if os.getenv("LOG_CONSOLE", "true").strip().lower() == "true":
        console_level_str = os.getenv("LOG_CONSOLE_LEVEL", "")
        console = logging.StreamHandler()
        console.setLevel(to_level(console_level_str) if console_level_str else lvl)
        console.setFormatter(ConsoleFormatter())
        console.addFilter(service_filter)
        root.addHandler(console)

    if log_dir:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            json_handler = RotatingFileHandler(
                str(log_dir / log_file_name), maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
            )
        except OSError as exc:
            logging.getLogger(__name__).warning("file logging disabled: %s", exc)
        else:
            json_handler.setLevel(lvl)
            json_handler.setFormatter(JSONFormatter())
            q: Queue[logging.LogRecord] = Queue(-1)
            qh = QueueHandler(q)
            qh.addFilter(service_filter)
            root.addHandler(qh)
            _listener = QueueListener(q, json_handler, respect_handler_level=True)
            _listener.start()

    # httpx logs every request at INFO; the fetch client already reports failures
    logging.getLogger("httpx").setLevel(max(lvl, logging.WARNING))


def shutdown_logging() -> None:
    global _listener
    if _listener:
        _listener.stop()
        _listener = None
