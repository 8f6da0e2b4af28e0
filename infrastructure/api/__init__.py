"""Infrastructure API module."""
from .fetch_client import FetchClient
from .opendota_client import OpenDotaClient
from .models import (
    FetchOutcome, FetchSuccess, FetchHttpError, FetchNetworkError,
    RateLimitInfo, ResponseMetadata,
)
from .rate_limit import is_rate_limit_response
from .retry_policy import RetryPolicy
from .timeout_config import TimeoutConfig

__all__ = [
    'FetchClient',
    'OpenDotaClient',
    'FetchOutcome',
    'FetchSuccess',
    'FetchHttpError',
    'FetchNetworkError',
    'RateLimitInfo',
    'ResponseMetadata',
    'is_rate_limit_response',
    'RetryPolicy',
    'TimeoutConfig',
]
