"""Tests for chunking strategies."""
import math

import pytest

from up2share.core.upload.models import DEFAULT_CHUNK_SIZE
from up2share.core.upload.strategies.chunking import FixedSizeChunkingStrategy


class TestFixedSizeChunkingStrategy:
    """Test suite for FixedSizeChunkingStrategy."""

    def test_default_chunk_size(self):
        assert FixedSizeChunkingStrategy().chunk_size == DEFAULT_CHUNK_SIZE == 10 * 1024 * 1024

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            FixedSizeChunkingStrategy(0)

    def test_empty_file(self):
        assert FixedSizeChunkingStrategy(10).calculate_chunks(0) == []

    def test_small_file(self):
        """File smaller than one chunk is a single range."""
        assert FixedSizeChunkingStrategy(10).calculate_chunks(3) == [(0, 2)]

    def test_exact_multiple(self):
        chunks = FixedSizeChunkingStrategy(10).calculate_chunks(30)
        assert chunks == [(0, 9), (10, 19), (20, 29)]

    def test_three_chunk_scenario(self):
        """25 MB at 10 MB chunks gives 10/10/5 MB ranges."""
        strategy = FixedSizeChunkingStrategy(10_000_000)
        chunks = strategy.calculate_chunks(25_000_000)

        assert chunks == [
            (0, 9_999_999),
            (10_000_000, 19_999_999),
            (20_000_000, 24_999_999),
        ]
        assert [end - start + 1 for start, end in chunks] == [
            10_000_000, 10_000_000, 5_000_000
        ]

    @pytest.mark.parametrize("size,chunk_size", [
        (1, 1), (7, 3), (100, 7), (1024, 1024), (1025, 1024), (10_485_761, DEFAULT_CHUNK_SIZE)
    ])
    def test_chunks_cover_file(self, size, chunk_size):
        """Chunks are contiguous, start at 0, end at size-1."""
        strategy = FixedSizeChunkingStrategy(chunk_size)
        chunks = strategy.calculate_chunks(size)

        assert len(chunks) == math.ceil(size / chunk_size) == strategy.count(size)
        assert chunks[0][0] == 0
        assert chunks[-1][1] == size - 1
        assert sum(end - start + 1 for start, end in chunks) == size
        for (_, prev_end), (start, _) in zip(chunks, chunks[1:]):
            assert start == prev_end + 1
