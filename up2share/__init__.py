"""
up2share - Async Python client for the up2sha.re file sharing service.

Usage:
    >>> from up2share import Up2ShareClient
    >>>
    >>> async with Up2ShareClient("api-key") as client:
    ...     result = await client.upload("video.mp4")
    ...     print(result.file_id)
"""
import logging
from .client import Up2ShareClient

# Configuration
from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    RetryConfig,
    AsyncAPIClient
)

# Upload engine
from .core.upload import (
    UploadCoordinator,
    UploadResult,
    UploadProgress,
    UploadState,
    NotificationChannel,
    ProgressNotification,
    CompletedNotification,
    ErrorNotification,
    ShareCreatedNotification
)

# Settings
from .core.settings import SettingsStorage, JSONSettings, MemorySettings

from .core.exceptions import (
    Up2ShareException,
    TransportError,
    APIRequestError,
    SettingsError,
    ShareValidationError,
    UploadError,
    FileAccessError,
    InitiationError,
    ChunkUploadError,
    MalformedLocationError,
    UploadCancelledError
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for up2share modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'up2share',
        'up2share.api',
        'up2share.client',
        'up2share.files',
        'up2share.shares',
        'up2share.settings',
        'up2share.upload.coordinator',
        'up2share.upload.session',
        'up2share.upload.chunk',
        'up2share.upload.file',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'Up2ShareClient',
    'AsyncAPIClient',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
    'UploadCoordinator',
    'UploadResult',
    'UploadProgress',
    'UploadState',
    'NotificationChannel',
    'ProgressNotification',
    'CompletedNotification',
    'ErrorNotification',
    'ShareCreatedNotification',
    'SettingsStorage',
    'JSONSettings',
    'MemorySettings',
    'Up2ShareException',
    'TransportError',
    'APIRequestError',
    'SettingsError',
    'ShareValidationError',
    'UploadError',
    'FileAccessError',
    'InitiationError',
    'ChunkUploadError',
    'MalformedLocationError',
    'UploadCancelledError',
    'setup_logging',
]
