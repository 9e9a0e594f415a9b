"""
Custom exceptions for up2sha.re operations.

Every fatal upload condition derives from UploadError so callers can
catch a single outcome type.
"""
from typing import Optional, Any


class Up2ShareException(Exception):
    """Base exception for all up2share errors."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            status: HTTP status code (if available)
        """
        self.status = status
        self.message = message
        super().__init__(message)


class TransportError(Up2ShareException):
    """Raised when the underlying network call fails (connection, timeout)."""
    pass


class APIRequestError(Up2ShareException):
    """Raised when a request/response call returns an unexpected status."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        body: Any = None
    ) -> None:
        self.body = body
        super().__init__(message, status)


class SettingsError(Up2ShareException):
    """Raised when persisted settings cannot be read or written."""
    pass


class ShareValidationError(Up2ShareException, ValueError):
    """Raised when share arguments are rejected before any request."""
    pass


class UploadError(Up2ShareException):
    """Base exception for every fatal upload condition."""
    pass


class FileAccessError(UploadError):
    """Source file is missing, unreadable or changed while uploading."""

    def __init__(self, message: str, file_path: Optional[str] = None) -> None:
        self.file_path = file_path
        super().__init__(message)


class InitiationError(UploadError):
    """Resumable upload negotiation failed."""
    pass


class ChunkUploadError(UploadError):
    """A chunk could not be uploaded within its retry budget."""

    def __init__(
        self,
        message: str,
        chunk_start: int,
        chunk_end: int,
        attempts: int,
        status: Optional[int] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            chunk_start: First byte of the failed chunk
            chunk_end: Last byte (inclusive) of the failed chunk
            attempts: Number of attempts made for this chunk
            status: Last HTTP status received (None on transport failure)
        """
        self.chunk_start = chunk_start
        self.chunk_end = chunk_end
        self.attempts = attempts
        super().__init__(message, status)


class MalformedLocationError(UploadError):
    """Location header is missing or does not have the expected shape."""

    def __init__(self, message: str, location: Optional[str] = None) -> None:
        self.location = location
        super().__init__(message)


class UploadCancelledError(UploadError):
    """Upload was cancelled between chunks."""
    pass
