"""Upload models."""
from .upload_models import (
    Chunk,
    UploadSession,
    UploadState,
    UploadResult,
    UploadProgress,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CONTENT_TYPE
)

__all__ = [
    'Chunk',
    'UploadSession',
    'UploadState',
    'UploadResult',
    'UploadProgress',
    'DEFAULT_CHUNK_SIZE',
    'DEFAULT_CONTENT_TYPE'
]
