"""Notification channels."""
from .discord_channel import DiscordChannel
from .preview_channel import PreviewChannel

__all__ = [
    'DiscordChannel',
    'PreviewChannel',
]
