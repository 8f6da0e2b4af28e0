"""Application use cases."""
from .replay_match import ReplayMatchUseCase

__all__ = ['ReplayMatchUseCase']
