"""
Protocol definitions for upload module.

Interfaces for dependency injection, so tests can swap the transport,
the chunking and the file reader.
"""
from typing import Protocol, Dict, Any, List, Tuple, Optional, Mapping
from pathlib import Path

from ..api.response import ApiResponse


class TransportProtocol(Protocol):
    """Authenticated request/response primitive."""

    @property
    def base_url(self) -> str:
        ...

    async def request(
        self,
        method: str,
        path: str,
        *,
        data: Optional[bytes] = None,
        json: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> ApiResponse:
        """
        Perform one call.

        Raises:
            TransportError: On network failure
        """
        ...


class ChunkingStrategy(Protocol):
    """Protocol for file chunking strategies."""

    def calculate_chunks(self, file_size: int) -> List[Tuple[int, int]]:
        """
        Calculate chunk boundaries for a file.

        Args:
            file_size: Total file size in bytes

        Returns:
            List of (start, end) tuples, end inclusive
        """
        ...


class FileReaderProtocol(Protocol):
    """Protocol for scoped file reading."""

    async def open_file(self, file_path: Path) -> None:
        ...

    async def read_chunk(self, file_path: Path, start: int, end: int) -> bytes:
        """Read bytes start..end (inclusive)."""
        ...

    async def close_file(self) -> None:
        """Release the handle; a second call is a no-op."""
        ...
