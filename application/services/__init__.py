"""Application services root exports."""
from .check_context import CheckContext
from .embed_builder import EmbedBuilder
from .match_checker import MatchChecker
from .rate_limit_governor import RateLimitGovernor
from .streak_tracker import derive_streak
from .timers import DeferredTimer, RepeatingTimer

__all__ = [
    "CheckContext",
    "EmbedBuilder",
    "MatchChecker",
    "RateLimitGovernor",
    "derive_streak",
    "DeferredTimer",
    "RepeatingTimer",
]
