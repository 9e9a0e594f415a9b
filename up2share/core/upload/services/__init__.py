"""Upload services module."""
from .file_service import FileValidator, AsyncFileReader
from .session_service import SessionNegotiator
from .chunk_service import ChunkUploader

__all__ = [
    'FileValidator',
    'AsyncFileReader',
    'SessionNegotiator',
    'ChunkUploader',
]
