from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import Any, Dict, Iterator

_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar("log_context", default={})


def get_context() -> Dict[str, Any]:
    return dict(_context.get())


@contextmanager
def log_context(**values: Any) -> Iterator[Dict[str, Any]]:
    """Bind values for the duration of a block (one check, one replay)."""
    current = dict(_context.get())
    current.update({k: v for k, v in values.items() if v is not None})
    token = _context.set(current)
    try:
        yield current
    finally:
        _context.reset(token)
