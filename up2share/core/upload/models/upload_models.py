"""
Data models for upload module.

Uses dataclasses for type-safe data structures. Nothing here is
persisted: a session lives only for one upload() call.
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


DEFAULT_CHUNK_SIZE = 10 * 1024 * 1024  # 10 MiB
DEFAULT_CONTENT_TYPE = 'application/octet-stream'


class UploadState(str, Enum):
    """Lifecycle of one upload session."""
    IDLE = 'idle'
    VALIDATING_FILE = 'validating_file'
    INITIATING = 'initiating'
    UPLOADING = 'uploading'
    COMPLETING = 'completing'
    COMPLETED = 'completed'
    FAILED = 'failed'

    @property
    def is_terminal(self) -> bool:
        return self in (UploadState.COMPLETED, UploadState.FAILED)


_TRANSITIONS = {
    UploadState.IDLE: {UploadState.VALIDATING_FILE},
    UploadState.VALIDATING_FILE: {UploadState.INITIATING},
    UploadState.INITIATING: {UploadState.UPLOADING},
    UploadState.UPLOADING: {UploadState.COMPLETING},
    UploadState.COMPLETING: {UploadState.COMPLETED},
    UploadState.COMPLETED: set(),
    UploadState.FAILED: set(),
}


@dataclass(frozen=True)
class Chunk:
    """
    A contiguous byte range of the source file.

    Attributes:
        start: First byte offset
        end: Last byte offset (inclusive)
        data: Exactly end - start + 1 bytes
    """
    start: int
    end: int
    data: bytes = field(repr=False)

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid chunk range: {self.start}-{self.end}")
        if len(self.data) != self.end - self.start + 1:
            raise ValueError(
                f"Chunk {self.start}-{self.end} expects "
                f"{self.end - self.start + 1} bytes, got {len(self.data)}"
            )

    @property
    def size(self) -> int:
        """Returns chunk size."""
        return self.end - self.start + 1

    def content_range(self, total_size: int) -> str:
        """Value for the Content-Range header."""
        return f"bytes {self.start}-{self.end}/{total_size}"


@dataclass
class UploadSession:
    """
    State of one resumable upload.

    Attributes:
        file_path: Source file (fixed for the session)
        total_size: Bytes declared at negotiation
        chunk_size: Bytes per chunk
        upload_uri: Opaque handle returned by negotiation
        upload_key: `key` parameter of upload_uri
        bytes_uploaded: Bytes confirmed by the server, never decreases
        state: Current lifecycle state
    """
    file_path: Path
    total_size: int = 0
    chunk_size: int = DEFAULT_CHUNK_SIZE
    upload_uri: Optional[str] = None
    upload_key: Optional[str] = None
    bytes_uploaded: int = 0
    state: UploadState = UploadState.IDLE

    def __post_init__(self):
        if isinstance(self.file_path, str):
            self.file_path = Path(self.file_path)
        if self.chunk_size <= 0:
            raise ValueError("Chunk size must be positive")

    @property
    def filename(self) -> str:
        return self.file_path.name

    def transition(self, state: UploadState) -> None:
        """Move to `state`; FAILED is reachable from any non-terminal state."""
        if state == UploadState.FAILED:
            if self.state.is_terminal:
                raise ValueError(f"Cannot fail a session in state {self.state.value}")
        elif state not in _TRANSITIONS[self.state]:
            raise ValueError(
                f"Invalid transition {self.state.value} -> {state.value}"
            )
        self.state = state

    def advance_to(self, position: int) -> None:
        """Record bytes confirmed by the server."""
        if position < self.bytes_uploaded or position > self.total_size:
            raise ValueError(
                f"Cannot move bytes_uploaded from {self.bytes_uploaded} to {position}"
            )
        self.bytes_uploaded = position

    @property
    def progress(self) -> float:
        if self.total_size == 0:
            return 0.0
        return self.bytes_uploaded / self.total_size * 100


@dataclass(frozen=True)
class UploadResult:
    """
    Result of a successful upload.

    Attributes:
        filename: Name sent at negotiation
        file_id: Server-assigned file identifier
        file_size: Size of uploaded file
    """
    filename: str
    file_id: str
    file_size: int = 0


@dataclass
class UploadProgress:
    """
    Upload progress snapshot handed to progress callbacks.

    Attributes:
        total_chunks: Total number of chunks
        uploaded_chunks: Number of uploaded chunks
        total_bytes: Total file size
        uploaded_bytes: Bytes uploaded so far
    """
    total_chunks: int
    uploaded_chunks: int = 0
    total_bytes: int = 0
    uploaded_bytes: int = 0

    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage of bytes."""
        if self.total_bytes == 0:
            return 0.0
        return (self.uploaded_bytes / self.total_bytes) * 100

    @property
    def is_complete(self) -> bool:
        """Returns True if upload is complete."""
        return self.uploaded_chunks >= self.total_chunks
