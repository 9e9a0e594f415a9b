"""
Upload coordinator.

Drives one resumable upload through its states:
IDLE -> VALIDATING_FILE -> INITIATING -> UPLOADING -> COMPLETING -> COMPLETED,
with FAILED reachable from every non-terminal state.
"""
import asyncio
import logging
from pathlib import Path
from typing import Optional, Callable, Union, Type, Any

from .protocols import ChunkingStrategy, FileReaderProtocol, TransportProtocol
from .models import (
    Chunk,
    UploadSession,
    UploadState,
    UploadResult,
    UploadProgress,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CONTENT_TYPE
)
from .location import extract_file_id
from .notifications import (
    NotificationChannel,
    ProgressNotification,
    CompletedNotification,
    ErrorNotification
)
from .strategies import FixedSizeChunkingStrategy
from .services import FileValidator, AsyncFileReader, SessionNegotiator, ChunkUploader
from ..api.config import RetryConfig
from ..api.response import ApiResponse
from ..exceptions import UploadError, UploadCancelledError

logger = logging.getLogger('up2share.upload.coordinator')


class UploadCoordinator:
    """
    Coordinates the file upload process.

    Uses dependency injection for all components, making it:
    - Testable (fake transport, in-memory files)
    - Extensible (swap chunking or file reading)

    One upload runs at a time per coordinator, one chunk in flight at a
    time. Progress, completion and errors are published on a typed
    NotificationChannel; subscribe before calling upload().

    Example:
        >>> coordinator = UploadCoordinator(api)
        >>> coordinator.on(ProgressNotification, lambda n: print(f"{n.progress:.1f}%"))
        >>> result = await coordinator.upload("video.mp4")
        >>> print(result.file_id)
    """

    def __init__(
        self,
        api_client: TransportProtocol,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        retry: Optional[RetryConfig] = None,
        chunking_strategy: Optional[ChunkingStrategy] = None,
        file_reader: Optional[FileReaderProtocol] = None,
        notifications: Optional[NotificationChannel] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            api_client: Authenticated API transport
            chunk_size: Default bytes per chunk
            retry: Per-chunk retry configuration
            chunking_strategy: Overrides fixed-size chunking
            file_reader: File reader implementation
            notifications: Channel to publish on (a new one if omitted)
            progress_callback: Optional callback receiving UploadProgress
        """
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")

        self._api = api_client
        self._chunk_size = chunk_size
        self._retry = retry or RetryConfig()
        self._chunking = chunking_strategy
        self._file_reader = file_reader or AsyncFileReader()
        self._validator = FileValidator()
        self._negotiator = SessionNegotiator(api_client)
        self._chunk_uploader = ChunkUploader(api_client, self._retry)
        self._notifications = notifications or NotificationChannel()
        self._progress_callback = progress_callback

        self._session: Optional[UploadSession] = None
        self._active = False
        self._cancel_requested = False

    @property
    def notifications(self) -> NotificationChannel:
        return self._notifications

    @property
    def session(self) -> Optional[UploadSession]:
        """The current (or last) upload session."""
        return self._session

    @property
    def state(self) -> UploadState:
        return self._session.state if self._session else UploadState.IDLE

    def on(self, kind: Type, callback: Callable[[Any], None]) -> 'UploadCoordinator':
        """Shortcut for notifications.on()."""
        self._notifications.on(kind, callback)
        return self

    def cancel(self) -> None:
        """Ask the running upload to stop before its next chunk."""
        if self._active:
            self._cancel_requested = True

    async def upload(
        self,
        file_path: Union[str, Path],
        chunk_size: Optional[int] = None,
        content_type: str = DEFAULT_CONTENT_TYPE,
        filename: Optional[str] = None
    ) -> UploadResult:
        """
        Execute the complete upload process.

        Args:
            file_path: File to upload
            chunk_size: Bytes per chunk (coordinator default if omitted)
            content_type: MIME type declared at negotiation
            filename: Remote name (defaults to the file's name)

        Returns:
            UploadResult with the server-assigned file id

        Raises:
            UploadError: Every fatal condition (FileAccessError,
                InitiationError, ChunkUploadError, MalformedLocationError,
                UploadCancelledError, an invalid chunk size, or a wrapped
                unexpected error)

        The CompletedNotification is published once the session is
        COMPLETED; an exception raised by its listeners reaches the caller
        unchanged and does not alter the session outcome.
        """
        if self._active:
            raise UploadError("An upload is already in progress on this coordinator")

        self._active = True
        self._cancel_requested = False
        session = UploadSession(file_path=file_path, chunk_size=self._chunk_size)
        self._session = session

        try:
            if chunk_size is not None:
                if chunk_size <= 0:
                    raise UploadError(f"Chunk size must be positive, got {chunk_size}")
                session.chunk_size = chunk_size
            result = await self._run(session, content_type, filename)
        except UploadError as e:
            self._fail(session, e)
            raise
        except asyncio.CancelledError:
            self._fail(session, UploadCancelledError("Upload task was cancelled"))
            raise
        except Exception as e:
            error = UploadError(f"Unexpected error during upload: {e}")
            self._fail(session, error)
            raise error from e
        finally:
            self._active = False

        self._notifications.emit(
            CompletedNotification(filename=result.filename, file_id=result.file_id)
        )
        return result

    async def _run(
        self,
        session: UploadSession,
        content_type: str,
        filename: Optional[str]
    ) -> UploadResult:
        session.transition(UploadState.VALIDATING_FILE)
        path, file_size = self._validator.validate(session.file_path)
        session.file_path = path
        session.total_size = file_size
        filename = filename or path.name

        file_size_mb = file_size / (1024 * 1024)
        logger.info(f"Starting upload: {filename} ({file_size_mb:.2f} MB)")

        session.transition(UploadState.INITIATING)
        session.upload_uri, session.upload_key = await self._negotiator.initiate(
            filename, file_size, content_type
        )
        logger.debug(f"Upload initiated: {session.upload_uri}")

        session.transition(UploadState.UPLOADING)
        final_response = await self._upload_chunks(session)

        session.transition(UploadState.COMPLETING)
        location = final_response.location if final_response is not None else None
        file_id = extract_file_id(location)

        session.transition(UploadState.COMPLETED)
        logger.info(f"Upload completed for file: {filename} (ID: {file_id})")
        return UploadResult(filename=filename, file_id=file_id, file_size=file_size)

    async def _upload_chunks(self, session: UploadSession) -> Optional[ApiResponse]:
        """
        Upload every chunk in order, one at a time.

        The file is opened once; the handle is released on every exit path.

        Returns:
            The 201 response that completed the upload, or None if the
            server never reported completion
        """
        chunking = self._chunking or FixedSizeChunkingStrategy(session.chunk_size)
        chunks = chunking.calculate_chunks(session.total_size)
        total = session.total_size

        progress = UploadProgress(total_chunks=len(chunks), total_bytes=total)
        logger.info(f"File split into {len(chunks)} chunks of up to {session.chunk_size} bytes")

        final_response: Optional[ApiResponse] = None
        try:
            await self._file_reader.open_file(session.file_path)

            for index, (start, end) in enumerate(chunks):
                if self._cancel_requested:
                    raise UploadCancelledError(
                        f"Upload cancelled after {session.bytes_uploaded} of {total} bytes"
                    )

                data = await self._file_reader.read_chunk(session.file_path, start, end)
                chunk = Chunk(start=start, end=end, data=data)
                del data

                result = await self._chunk_uploader.upload_chunk(
                    session.upload_uri,
                    total,
                    chunk,
                    retries_left=self._retry.max_retries
                )

                session.advance_to(end + 1)
                progress.uploaded_chunks = index + 1
                progress.uploaded_bytes = session.bytes_uploaded

                self._notifications.emit(ProgressNotification(
                    progress=(end + 1) / total * 100,
                    chunk_start=start,
                    chunk_end=end
                ))
                if self._progress_callback:
                    self._progress_callback(progress)

                if result is not None:
                    if end + 1 < total:
                        logger.warning(
                            f"Server reported completion at byte {end + 1} of {total}"
                        )
                    final_response = result
                    break
        except BaseException:
            # The upload error wins over a failure to release the handle
            try:
                await self._file_reader.close_file()
            except Exception as close_error:
                logger.warning(f"Failed to close {session.file_path}: {close_error}")
            raise

        await self._file_reader.close_file()
        logger.info(f"Chunk upload finished: {session.bytes_uploaded} of {total} bytes")
        return final_response

    def _fail(self, session: UploadSession, error: UploadError) -> None:
        """Move to FAILED and publish the error."""
        if not session.state.is_terminal:
            session.transition(UploadState.FAILED)
        logger.error(f"Error during upload of {session.file_path}: {error}")
        self._notifications.emit(ErrorNotification(message=str(error)))
