"""up2sha.re API transport module."""
from .config import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    RetryConfig,
    DEFAULT_BASE_URL
)
from .response import ApiResponse
from .async_client import AsyncAPIClient

__all__ = [
    'AsyncAPIClient',
    'ApiResponse',

    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
    'DEFAULT_BASE_URL',
]
