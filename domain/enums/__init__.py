"""Domain enumerations."""
from .game_mode import GameMode

__all__ = [
    'GameMode',
]
