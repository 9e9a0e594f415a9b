"""
Upload module for up2sha.re resumable uploads.

Negotiates an upload URI, sends the file in sequential chunks with a
per-chunk retry budget, and reads the file id from the final Location.
"""
from .coordinator import UploadCoordinator
from .location import LocationParser, extract_upload_key, extract_file_id
from .models import (
    Chunk,
    UploadSession,
    UploadState,
    UploadResult,
    UploadProgress,
    DEFAULT_CHUNK_SIZE
)
from .notifications import (
    NotificationChannel,
    ProgressNotification,
    CompletedNotification,
    ErrorNotification,
    ShareCreatedNotification
)
from .protocols import ChunkingStrategy, FileReaderProtocol, TransportProtocol

__all__ = [
    # Main classes
    'UploadCoordinator',
    'LocationParser',
    'extract_upload_key',
    'extract_file_id',

    # Models
    'Chunk',
    'UploadSession',
    'UploadState',
    'UploadResult',
    'UploadProgress',
    'DEFAULT_CHUNK_SIZE',

    # Notifications
    'NotificationChannel',
    'ProgressNotification',
    'CompletedNotification',
    'ErrorNotification',
    'ShareCreatedNotification',

    # Protocols
    'ChunkingStrategy',
    'FileReaderProtocol',
    'TransportProtocol',
]
