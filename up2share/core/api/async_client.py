"""
Async up2sha.re API client.

Authenticated request/response primitive shared by uploads, files and
shares. Retry lives in the callers that know what is safe to resend.
"""
import json as jsonlib
import asyncio
import logging
from typing import Dict, Optional, Any, Mapping
import aiohttp

from .config import APIConfig
from .response import ApiResponse
from ..exceptions import TransportError
from ..logging import get_logger


class AsyncAPIClient:
    """
    Asynchronous up2sha.re API client.

    Features:
    - X-Api-Key header on every call
    - Base endpoint resolution for relative paths
    - Global timeout from configuration
    - Redirects are never followed (308 means "resume" for uploads)

    Example:
        >>> async with AsyncAPIClient("my-api-key") as api:
        ...     response = await api.request('GET', '/shares')
        ...     print(response.status)
    """

    API_KEY_HEADER = 'X-Api-Key'

    def __init__(self, api_key: str, config: Optional[APIConfig] = None):
        """
        Initialize async API client.

        Args:
            api_key: up2sha.re API key
            config: API configuration (uses defaults if not provided)
        """
        if not api_key:
            raise ValueError("API key is required")

        self._api_key = api_key
        self._config = config or APIConfig.default()
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None

        self._logger = get_logger('up2share.api')
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            self._logger.setLevel(self._config.log_level)

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    async def __aenter__(self) -> 'AsyncAPIClient':
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                **self._config.get_session_kwargs()
            )
        return self._session

    async def close(self):
        """Close client and release resources. Safe to call twice."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

        if self._connector and not self._connector.closed:
            await self._connector.close()
        self._connector = None

    def build_url(self, path: str) -> str:
        """Resolve a path against the base endpoint (absolute URLs pass through)."""
        if path.startswith(('http://', 'https://')):
            return path
        if not path.startswith('/'):
            path = '/' + path
        return self._config.base_url.rstrip('/') + path

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
        Perform one HTTP call.

        Args:
            method: HTTP method
            path: Path relative to the base endpoint, or an absolute URL
            data: Raw request body
            json: Object serialized as the JSON body. The Content-Type
                  header is left to the caller when one is given.
            headers: Extra request headers
            params: Query string parameters

        Returns:
            ApiResponse with status, headers and body (any status)

        Raises:
            TransportError: On connection failure or timeout
        """
        session = await self._ensure_session()
        url = self.build_url(path)

        request_headers = {self.API_KEY_HEADER: self._api_key}
        if headers:
            request_headers.update(headers)

        if json is not None:
            if data is not None:
                raise ValueError("data and json are mutually exclusive")
            data = jsonlib.dumps(json).encode('utf-8')
            request_headers.setdefault('Content-Type', 'application/json')

        size = len(data) if data else 0
        self._logger.debug(f"{method} {url} ({size} bytes)")

        try:
            async with session.request(
                method,
                url,
                data=data,
                headers=request_headers,
                params=params,
                allow_redirects=False,
                proxy=self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None
            ) as response:
                body = await response.read()
                self._logger.debug(f"{method} {url} -> {response.status}")
                return ApiResponse(
                    status=response.status,
                    headers=response.headers,
                    body=body
                )
        except asyncio.TimeoutError as e:
            self._logger.error(f"{method} {url} timed out after {self._config.timeout.total}s")
            raise TransportError(
                f"Request timed out after {self._config.timeout.total}s: {method} {url}"
            ) from e
        except aiohttp.ClientError as e:
            self._logger.error(f"Network error on {method} {url}: {e}")
            raise TransportError(f"Network error: {e}") from e

    async def get(self, path: str, **kwargs) -> ApiResponse:
        return await self.request('GET', path, **kwargs)

    async def post(self, path: str, **kwargs) -> ApiResponse:
        return await self.request('POST', path, **kwargs)

    async def put(self, path: str, **kwargs) -> ApiResponse:
        return await self.request('PUT', path, **kwargs)

    async def delete(self, path: str, **kwargs) -> ApiResponse:
        return await self.request('DELETE', path, **kwargs)
