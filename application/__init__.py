"""Application layer - Services and use cases."""
from .services import MatchChecker
from .use_cases import ReplayMatchUseCase

__all__ = [
    'MatchChecker',
    'ReplayMatchUseCase',
]
