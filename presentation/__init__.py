"""Presentation layer - CLI commands and the HTTP status endpoint."""
from .cli import NotifierCommand, ReplayCommand

__all__ = [
    "NotifierCommand",
    "ReplayCommand",
]
