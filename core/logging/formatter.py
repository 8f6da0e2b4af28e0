from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict

from .context import get_context

_LEVEL_COLORS = {
    "TRACE": "\033[90m",
    "DEBUG": "\033[37m",
    "INFO": "\033[36m",
    "SUCCESS": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"

# attributes every LogRecord carries; anything else came in through `extra`
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime", "service", "log_context"}


def _record_metadata(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime(record.created)),
        "level": record.levelname,
        "service": getattr(record, "service", None),
        "logger": record.name,
        "function": record.funcName,
        "line_number": record.lineno,
    }


def _record_context(record: logging.LogRecord) -> Dict[str, Any]:
    ctx = getattr(record, "log_context", None)
    return dict(ctx) if ctx is not None else get_context()


def _record_extra(record: logging.LogRecord) -> Dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED and not k.startswith("_")}


class ConsoleFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        try:
            md = _record_metadata(record)
            lvl = record.levelname
            parts = [
                md["timestamp"],
                f"{lvl:<7}",
                md["service"] or "-",
                f"{record.module}:{md['line_number']}",
                record.getMessage(),
            ]
            fields = {**_record_context(record), **_record_extra(record)}
            if fields:
                parts.append(" ".join(f"{k}={v}" for k, v in fields.items()))
            if record.exc_info:
                parts.append(self.formatException(record.exc_info))
            return f"{_LEVEL_COLORS.get(lvl, '')}{' | '.join(parts)}{_RESET}"
        except Exception:
            return record.getMessage()


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = _record_metadata(record)
        payload["message"] = record.getMessage()
        ctx = _record_context(record)
        if ctx:
            payload["context"] = ctx
        extra = _record_extra(record)
        if extra:
            payload["extra"] = extra
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False, separators=(",", ":"))
