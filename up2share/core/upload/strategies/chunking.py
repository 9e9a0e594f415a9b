"""
Chunking strategies for file uploads.

Implements Strategy Pattern for different chunking algorithms.
"""
from abc import ABC, abstractmethod
from typing import Iterator, List, Tuple

from ..models import DEFAULT_CHUNK_SIZE


class BaseChunkingStrategy(ABC):
    """Abstract base class for chunking strategies."""

    @abstractmethod
    def iter_chunks(self, file_size: int) -> Iterator[Tuple[int, int]]:
        """Yield (start, end) boundaries, end inclusive."""
        pass

    def calculate_chunks(self, file_size: int) -> List[Tuple[int, int]]:
        """Calculate all chunk boundaries."""
        return list(self.iter_chunks(file_size))


class FixedSizeChunkingStrategy(BaseChunkingStrategy):
    """
    Fixed-size chunking: [0, C), [C, 2C), ... clipped to the file size.

    Boundaries are reported with an inclusive end so they map directly
    onto `Content-Range: bytes start-end/total`.

    Example:
        >>> FixedSizeChunkingStrategy(10).calculate_chunks(25)
        [(0, 9), (10, 19), (20, 24)]
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize with chunk size.

        Args:
            chunk_size: Size of each chunk in bytes
        """
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.chunk_size = chunk_size

    def iter_chunks(self, file_size: int) -> Iterator[Tuple[int, int]]:
        if file_size < 0:
            raise ValueError("File size cannot be negative")

        position = 0
        while position < file_size:
            end = min(position + self.chunk_size, file_size) - 1
            yield position, end
            position = end + 1

    def count(self, file_size: int) -> int:
        """Number of chunks, ceil(file_size / chunk_size)."""
        return -(-file_size // self.chunk_size)
