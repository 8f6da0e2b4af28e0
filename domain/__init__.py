"""Domain layer - Business entities, enums, errors and interfaces."""
from .entities import (
    PlayerPerformance, MatchSummary, MatchDetail,
    HeroInfo, ItemInfo, ItemCatalog,
    PersistedState, CheckResult,
    EmbedField, ImageAttachment, MatchNotification,
)
from .enums import GameMode
from .errors import (
    NotifierError, ConfigurationError, NetworkError, HttpError, RateLimitError, DataError, PersistenceError,
)
from .interfaces import IMatchRepository, IStateStore, INotificationChannel, IItemImageRenderer

__all__ = [
    # Entities
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
    # Enums
    'GameMode',
    # Errors
    'NotifierError',
    'ConfigurationError',
    'NetworkError',
    'HttpError',
    'RateLimitError',
    'DataError',
    'PersistenceError',
    # Interfaces
    'IMatchRepository',
    'IStateStore',
    'INotificationChannel',
    'IItemImageRenderer',
]
