"""Domain interfaces."""
from .repository import IMatchRepository, IStateStore, INotificationChannel, IItemImageRenderer

__all__ = [
    'IMatchRepository',
    'IStateStore',
    'INotificationChannel',
    'IItemImageRenderer',
]
