"""Infrastructure layer - API clients, repositories and channels."""
from .api import FetchClient, OpenDotaClient, RetryPolicy, TimeoutConfig
from .repositories import MatchRepository, JsonStateStore
from .notifications import DiscordChannel, PreviewChannel

__all__ = [
    'FetchClient',
    'OpenDotaClient',
    'RetryPolicy',
    'TimeoutConfig',
    'MatchRepository',
    'JsonStateStore',
    'DiscordChannel',
    'PreviewChannel',
]
