"""Presentation CLI exports."""
from .notifier_command import NotifierCommand
from .replay_command import ReplayCommand

__all__ = [
    "NotifierCommand",
    "ReplayCommand",
]
