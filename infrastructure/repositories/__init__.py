"""Infrastructure repositories module."""
from .match_repository import MatchRepository
from .state_repository import JsonStateStore

__all__ = [
    'MatchRepository',
    'JsonStateStore',
]
