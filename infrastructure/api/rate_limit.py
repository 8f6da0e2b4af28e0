"""Recognising an exhausted upstream quota."""
from typing import Any

# OpenDota's body for an exhausted free-tier quota: {"error": "daily api limit exceeded"}
DAILY_LIMIT_SIGNATURE = "daily api limit exceeded"


def error_text(body: Any) -> str:
    if isinstance(body, dict) and body.get("error") is not None:
        return str(body["error"])
    return "" if body is None else str(body)


def is_rate_limit_response(status_code: int, body: Any) -> bool:
    """429, or any error body that mentions the daily limit."""
    if status_code == 429:
        return True
    return DAILY_LIMIT_SIGNATURE in error_text(body).lower()
