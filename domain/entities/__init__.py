"""Domain entities."""
from .player import PlayerPerformance
from .match import MatchSummary, MatchDetail
from .constants import HeroInfo, ItemInfo, ItemCatalog
from .state import PersistedState, CheckResult
from .notification import EmbedField, ImageAttachment, MatchNotification

__all__ = [
    'PlayerPerformance',
    'MatchSummary',
    'MatchDetail',
    'HeroInfo',
    'ItemInfo',
    'ItemCatalog',
    'PersistedState',
    'CheckResult',
    'EmbedField',
    'ImageAttachment',
    'MatchNotification',
]
