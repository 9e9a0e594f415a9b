"""
Up2ShareClient - High-level async client for up2sha.re.

Example:
    >>> async with Up2ShareClient("my-api-key") as client:
    ...     result = await client.upload("report.pdf")
    ...     share = await client.create_share(result.file_id)
"""
from datetime import datetime
from pathlib import Path
from typing import Optional, Dict, Any, Union, Callable, Type

from .core.api import AsyncAPIClient, APIConfig, RetryConfig, TimeoutConfig
from .core.exceptions import SettingsError
from .core.logging import get_logger
from .core.settings import BaseSettings, JSONSettings
from .core.shares import FileService, ShareService
from .core.upload import (
    UploadCoordinator,
    UploadResult,
    UploadProgress,
    NotificationChannel,
    DEFAULT_CHUNK_SIZE
)
from .core.upload.models import DEFAULT_CONTENT_TYPE


class Up2ShareClient:
    """
    High-level async client for up2sha.re.

    The API key comes from the argument or, if omitted, from the settings
    store (`~/.config/up2share/app_config.json` by default).

    With custom configuration:
        >>> config = Up2ShareClient.create_config(timeout=300, max_retries=8)
        >>> async with Up2ShareClient(config=config) as client:
        ...     shares = await client.list_shares()
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        settings: Optional[BaseSettings] = None,
        config: Optional[APIConfig] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE
    ):
        """
        Initialize client.

        Args:
            api_key: up2sha.re API key (read from settings if omitted)
            settings: Settings storage for the API key
            config: Optional API configuration
            chunk_size: Default upload chunk size in bytes

        Raises:
            SettingsError: If no API key is available
        """
        self._config = config or APIConfig.default()
        self._logger = get_logger('up2share.client')
        self._settings = settings

        if not api_key:
            storage = settings if settings is not None else JSONSettings()
            api_key = storage.load_api_key()
        if not api_key:
            raise SettingsError("API key not found. Please set it first.")

        self._api = AsyncAPIClient(api_key, self._config)
        self._notifications = NotificationChannel()
        self._chunk_size = chunk_size
        self._files = FileService(self._api)
        self._shares = ShareService(self._api, self._notifications)

    @staticmethod
    def create_config(
        base_url: Optional[str] = None,
        proxy: Optional[str] = None,
        timeout: float = 120,
        max_retries: int = 4,
        retry_delay: float = 0.0,
        user_agent: Optional[str] = None
    ) -> APIConfig:
        """
        Create API configuration with common options.

        Args:
            base_url: API endpoint
            proxy: Proxy URL (e.g., "http://proxy:8080")
            timeout: Global request timeout in seconds
            max_retries: Retry budget per chunk
            retry_delay: Delay before the first chunk retry (0 = immediate)
            user_agent: Custom user agent string

        Returns:
            APIConfig instance
        """
        kwargs: Dict[str, Any] = {
            'timeout': TimeoutConfig(total=timeout),
            'retry': RetryConfig(max_retries=max_retries, base_delay=retry_delay),
        }
        if base_url:
            kwargs['base_url'] = base_url
        if user_agent:
            kwargs['user_agent'] = user_agent
        if proxy:
            return APIConfig.with_proxy(proxy, **kwargs)
        return APIConfig(**kwargs)

    @property
    def api(self) -> AsyncAPIClient:
        return self._api

    @property
    def notifications(self) -> NotificationChannel:
        """Channel carrying share and upload notifications."""
        return self._notifications

    def on(self, kind: Type, callback: Callable[[Any], None]) -> 'Up2ShareClient':
        """Subscribe to a notification type (before starting an upload)."""
        self._notifications.on(kind, callback)
        return self

    async def __aenter__(self) -> 'Up2ShareClient':
        await self._api.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        await self._api.close()

    # =========================================================================
    # Upload
    # =========================================================================

    def create_uploader(
        self,
        chunk_size: Optional[int] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> UploadCoordinator:
        """Build a coordinator publishing on this client's channel."""
        return UploadCoordinator(
            self._api,
            chunk_size=chunk_size or self._chunk_size,
            retry=self._config.retry,
            notifications=self._notifications,
            progress_callback=progress_callback
        )

    async def upload(
        self,
        file_path: Union[str, Path],
        progress_callback: Optional[Callable[[UploadProgress], None]] = None,
        chunk_size: Optional[int] = None,
        content_type: str = DEFAULT_CONTENT_TYPE,
        name: Optional[str] = None
    ) -> UploadResult:
        """
        Upload a file.

        Args:
            file_path: Local file
            progress_callback: Receives UploadProgress after each chunk
            chunk_size: Bytes per chunk
            content_type: MIME type declared to the service
            name: Remote file name (defaults to the local name)

        Returns:
            UploadResult with filename and file_id

        Raises:
            UploadError: On any fatal upload condition
        """
        uploader = self.create_uploader(chunk_size, progress_callback)
        return await uploader.upload(file_path, content_type=content_type, filename=name)

    async def upload_and_share(
        self,
        file_path: Union[str, Path],
        password: Optional[str] = None,
        expires_at: Optional[Union[str, datetime]] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> Dict[str, Any]:
        """Upload a file and share it in one step; returns the share."""
        result = await self.upload(file_path, progress_callback=progress_callback)
        return await self.create_share(result.file_id, password=password, expires_at=expires_at)

    # =========================================================================
    # Files and shares
    # =========================================================================

    async def get_file(self, file_id: Union[int, str]) -> Dict[str, Any]:
        return await self._files.get_file(file_id)

    async def list_shares(self, page: int = 1) -> Dict[str, Any]:
        return await self._shares.list_shares(page)

    async def create_share(
        self,
        file_id: Union[int, str],
        target_id: Optional[Union[int, str]] = None,
        password: Optional[str] = None,
        expires_at: Optional[Union[str, datetime]] = None
    ) -> Dict[str, Any]:
        return await self._shares.create_share(file_id, target_id, password, expires_at)

    async def get_share(self, share_id: Union[int, str]) -> Dict[str, Any]:
        return await self._shares.get_share(share_id)

    async def delete_share(self, share_id: Union[int, str]) -> Optional[Dict[str, Any]]:
        return await self._shares.delete_share(share_id)
