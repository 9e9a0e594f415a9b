"""
Chunk upload service.

Handles uploading individual byte ranges to an upload URI.
"""
from typing import Optional
import logging
import time
import asyncio

from ..models import Chunk
from ..protocols import TransportProtocol
from ...api.config import RetryConfig
from ...api.response import ApiResponse
from ...exceptions import ChunkUploadError, TransportError


class ChunkUploader:
    """
    Uploads one chunk with a bounded, sequential retry budget.

    Responsibilities:
    - PUT the chunk with its Content-Range
    - Map 201 (upload complete) and 308 (keep going)
    - Resend the same in-memory chunk on any other outcome
    """

    CREATED = 201
    RESUME_INCOMPLETE = 308

    def __init__(
        self,
        transport: TransportProtocol,
        retry: Optional[RetryConfig] = None
    ):
        """
        Initialize chunk uploader.

        Args:
            transport: Authenticated API transport
            retry: Retry configuration (delay between attempts)
        """
        self._transport = transport
        self._retry = retry or RetryConfig()
        self._logger = logging.getLogger('up2share.upload.chunk')

    @property
    def max_retries(self) -> int:
        return self._retry.max_retries

    async def upload_chunk(
        self,
        upload_uri: str,
        total_size: int,
        chunk: Chunk,
        retries_left: Optional[int] = None
    ) -> Optional[ApiResponse]:
        """
        Upload a single chunk.

        Args:
            upload_uri: URI returned by negotiation
            total_size: Total file size declared at negotiation
            chunk: Byte range and its data
            retries_left: Retry budget for this chunk (defaults to max_retries)

        Returns:
            The final response (status 201, carries Location) when the
            upload is complete, or None when the server expects more bytes.

        Raises:
            ChunkUploadError: When every attempt failed
        """
        if retries_left is None:
            retries_left = self._retry.max_retries

        headers = {
            'Content-Range': chunk.content_range(total_size),
            'Content-Type': 'application/octet-stream',
            'Content-Length': str(chunk.size),
        }
        chunk_size_kb = chunk.size / 1024
        attempt = 0

        while True:
            attempt += 1
            upload_start = time.time()
            self._logger.debug(
                f"Uploading bytes {chunk.start}-{chunk.end}/{total_size} "
                f"({chunk_size_kb:.1f} KB, attempt {attempt})"
            )

            status = None
            try:
                response = await self._transport.request(
                    'PUT',
                    upload_uri,
                    data=chunk.data,
                    headers=headers
                )
                status = response.status
                if status == self.CREATED:
                    self._log_done(chunk, upload_start, "upload complete")
                    return response
                if status == self.RESUME_INCOMPLETE:
                    self._log_done(chunk, upload_start, "resume")
                    return None
                reason = f"Chunk upload failed: {status}"
            except TransportError as e:
                reason = f"Chunk upload failed: {e}"

            if retries_left <= 0:
                self._logger.error(
                    f"Error uploading chunk {chunk.start}-{chunk.end} after "
                    f"{attempt} attempts: {reason}"
                )
                raise ChunkUploadError(
                    f"{reason} (bytes {chunk.start}-{chunk.end}, {attempt} attempts)",
                    chunk_start=chunk.start,
                    chunk_end=chunk.end,
                    attempts=attempt,
                    status=status
                )

            self._logger.warning(
                f"Retrying chunk upload ({retries_left} retries left): {reason}"
            )
            delay = self._retry.calculate_delay(attempt - 1)
            if delay > 0:
                await asyncio.sleep(delay)
            retries_left -= 1

    def _log_done(self, chunk: Chunk, upload_start: float, outcome: str) -> None:
        upload_time = time.time() - upload_start
        chunk_size_kb = chunk.size / 1024
        speed_kbps = (chunk_size_kb / upload_time) if upload_time > 0 else 0
        self._logger.debug(
            f"Chunk {chunk.start}-{chunk.end} sent in {upload_time:.2f}s "
            f"({speed_kbps:.1f} KB/s, {outcome})"
        )
