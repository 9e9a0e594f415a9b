"""File and share management."""
from .service import FileService, ShareService

__all__ = [
    'FileService',
    'ShareService',
]
