"""
File validation and reading services.

Single Responsibility: Each class handles one specific task.
"""
import os
from pathlib import Path
from typing import Tuple, Optional, Union
import logging
import aiofiles

from ...exceptions import FileAccessError


class FileValidator:
    """
    Validates files before upload.

    Responsibilities:
    - Check file existence and readability
    - Verify file is not a directory
    - Get file size
    """

    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.

        Args:
            file_path: Path to the file

        Returns:
            Tuple of (validated Path, file size in bytes)

        Raises:
            FileAccessError: If the file is missing, not a regular file,
                unreadable or empty
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path

        try:
            stat = path.stat()
        except OSError as e:
            raise FileAccessError(
                f"File access error: {e.strerror or e}: {path}",
                file_path=str(path)
            ) from e

        if not path.is_file():
            raise FileAccessError(f"Path is not a file: {path}", file_path=str(path))

        if not os.access(path, os.R_OK):
            raise FileAccessError(f"File is not readable: {path}", file_path=str(path))

        self.validate_size(stat.st_size, path)

        return path, stat.st_size

    def validate_size(self, file_size: int, path: Optional[Path] = None) -> None:
        """
        Validate file size.

        Raises:
            FileAccessError: If file is empty
        """
        if file_size == 0:
            raise FileAccessError(
                f"Cannot upload empty file: {path}" if path else "Cannot upload empty file",
                file_path=str(path) if path else None
            )


class AsyncFileReader:
    """
    Asynchronous file reader for chunk-based reading.

    Uses aiofiles for non-blocking I/O. The handle is opened once per
    upload and released by close_file(), which tolerates repeated calls.
    """

    def __init__(self):
        """Initialize file reader."""
        self._logger = logging.getLogger('up2share.upload.file')
        self._file_handle = None
        self._current_file_path: Optional[Path] = None

    @property
    def is_open(self) -> bool:
        return self._file_handle is not None

    async def open_file(self, file_path: Path) -> None:
        """
        Open file for reading. Call this before reading chunks.

        Raises:
            FileAccessError: If the file cannot be opened
        """
        if self._file_handle is not None and self._current_file_path == file_path:
            return

        if self._file_handle is not None:
            await self.close_file()

        try:
            self._file_handle = await aiofiles.open(file_path, 'rb')
        except OSError as e:
            raise FileAccessError(
                f"File access error: {e.strerror or e}: {file_path}",
                file_path=str(file_path)
            ) from e
        self._current_file_path = file_path
        self._logger.debug(f"Opened {file_path}")

    async def close_file(self) -> None:
        """Close the currently open file (no-op when already closed)."""
        if self._file_handle is not None:
            handle = self._file_handle
            self._file_handle = None
            self._current_file_path = None
            await handle.close()
            self._logger.debug("File handle released")

    async def read_chunk(
        self,
        file_path: Path,
        start: int,
        end: int
    ) -> bytes:
        """
        Read bytes start..end (inclusive) into memory.

        Reuses the open handle when there is one.

        Raises:
            FileAccessError: If reading fails or returns fewer bytes than asked
        """
        length = end - start + 1
        try:
            if self._file_handle is not None and self._current_file_path == file_path:
                await self._file_handle.seek(start)
                data = await self._file_handle.read(length)
            else:
                async with aiofiles.open(file_path, 'rb') as f:
                    await f.seek(start)
                    data = await f.read(length)
        except OSError as e:
            self._logger.error(f"Failed to read chunk {start}-{end}: {e}")
            raise FileAccessError(
                f"Failed to read bytes {start}-{end} of {file_path}: {e}",
                file_path=str(file_path)
            ) from e

        if len(data) != length:
            raise FileAccessError(
                f"Short read at {start}-{end} of {file_path}: got {len(data)} of "
                f"{length} bytes (file changed during upload?)",
                file_path=str(file_path)
            )

        self._logger.debug(f"Read chunk: {start}-{end} ({len(data)} bytes)")
        return data
