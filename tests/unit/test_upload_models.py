"""Tests for upload models."""
import pytest
from pathlib import Path

from up2share.core.upload.models import (
    Chunk,
    UploadSession,
    UploadState,
    UploadResult,
    UploadProgress
)


class TestChunk:
    """Test suite for Chunk."""

    def test_create(self):
        chunk = Chunk(start=10, end=19, data=b"x" * 10)

        assert chunk.size == 10
        assert chunk.content_range(25) == "bytes 10-19/25"

    def test_single_byte(self):
        """A one-byte chunk has start == end."""
        chunk = Chunk(start=0, end=0, data=b"a")

        assert chunk.size == 1
        assert chunk.content_range(1) == "bytes 0-0/1"

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="expects 10 bytes"):
            Chunk(start=0, end=9, data=b"short")

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            Chunk(start=5, end=4, data=b"")

    def test_immutable(self):
        chunk = Chunk(start=0, end=0, data=b"a")

        with pytest.raises(AttributeError):
            chunk.start = 1


class TestUploadSession:
    """Test suite for UploadSession."""

    @pytest.fixture
    def session(self):
        return UploadSession(file_path="/tmp/movie.mp4", total_size=25, chunk_size=10)

    def test_defaults(self, session):
        assert session.file_path == Path("/tmp/movie.mp4")
        assert session.filename == "movie.mp4"
        assert session.state == UploadState.IDLE
        assert session.bytes_uploaded == 0
        assert session.upload_uri is None

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            UploadSession(file_path=Path("a"), chunk_size=0)

    def test_happy_path_transitions(self, session):
        for state in (
            UploadState.VALIDATING_FILE,
            UploadState.INITIATING,
            UploadState.UPLOADING,
            UploadState.COMPLETING,
            UploadState.COMPLETED,
        ):
            session.transition(state)

        assert session.state == UploadState.COMPLETED
        assert session.state.is_terminal

    def test_skipping_a_state_rejected(self, session):
        session.transition(UploadState.VALIDATING_FILE)

        with pytest.raises(ValueError, match="Invalid transition"):
            session.transition(UploadState.UPLOADING)

    @pytest.mark.parametrize("steps", [0, 1, 2, 3, 4])
    def test_failed_from_any_non_terminal(self, session, steps):
        order = [
            UploadState.VALIDATING_FILE,
            UploadState.INITIATING,
            UploadState.UPLOADING,
            UploadState.COMPLETING,
        ]
        for state in order[:steps]:
            session.transition(state)

        session.transition(UploadState.FAILED)

        assert session.state == UploadState.FAILED

    def test_terminal_states_are_final(self, session):
        session.transition(UploadState.FAILED)

        with pytest.raises(ValueError):
            session.transition(UploadState.FAILED)
        with pytest.raises(ValueError):
            session.transition(UploadState.VALIDATING_FILE)

    def test_advance_to(self, session):
        session.advance_to(10)
        session.advance_to(20)
        session.advance_to(25)

        assert session.bytes_uploaded == 25
        assert session.progress == 100.0

    def test_advance_never_decreases(self, session):
        session.advance_to(20)

        with pytest.raises(ValueError):
            session.advance_to(10)

    def test_advance_past_total(self, session):
        with pytest.raises(ValueError):
            session.advance_to(26)

    def test_progress_without_size(self):
        assert UploadSession(file_path=Path("a")).progress == 0.0


class TestUploadResult:
    """Test suite for UploadResult."""

    def test_create(self):
        result = UploadResult(filename="a.bin", file_id="42", file_size=25)

        assert result.file_id == "42"
        assert result.file_size == 25


class TestUploadProgress:
    """Test suite for UploadProgress."""

    def test_percentage_by_bytes(self):
        progress = UploadProgress(total_chunks=3, uploaded_chunks=1, total_bytes=25, uploaded_bytes=10)

        assert progress.percentage == 40.0
        assert progress.is_complete is False

    def test_zero_total(self):
        assert UploadProgress(total_chunks=0).percentage == 0.0

    def test_complete(self):
        progress = UploadProgress(total_chunks=3, uploaded_chunks=3, total_bytes=25, uploaded_bytes=25)

        assert progress.is_complete
        assert progress.percentage == 100.0
