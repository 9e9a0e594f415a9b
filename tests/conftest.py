"""Pytest fixtures for up2share tests."""
from typing import Any, Dict, List, Optional

import pytest

from up2share.core.api.response import ApiResponse


class FakeTransport:
    """
    Scripted stand-in for AsyncAPIClient.

    Each call pops the next scripted item: an ApiResponse is returned,
    an exception is raised. Every call is recorded.
    """

    def __init__(self, responses=None, base_url: str = 'https://api.up2sha.re'):
        self._responses: List[Any] = list(responses or [])
        self._base_url = base_url
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> 'FakeTransport':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        self.closed = True

    def queue(self, *items) -> 'FakeTransport':
        self._responses.extend(items)
        return self

    def calls_for(self, method: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c['method'] == method]

    async def request(
        self,
        method: str,
        path: str,
        *,
        data: Optional[bytes] = None,
        json: Any = None,
        headers=None,
        params=None
    ) -> ApiResponse:
        self.calls.append({
            'method': method,
            'path': path,
            'data': data,
            'json': json,
            'headers': dict(headers or {}),
            'params': params,
        })
        if not self._responses:
            raise AssertionError(f"Unexpected call: {method} {path}")
        item = self._responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


class Responses:
    """Builders for scripted responses."""

    @staticmethod
    def created(location: Optional[str] = None, body: bytes = b'') -> ApiResponse:
        headers = {'Location': location} if location is not None else {}
        return ApiResponse(status=201, headers=headers, body=body)

    @staticmethod
    def resume() -> ApiResponse:
        return ApiResponse(status=308, headers={'Range': 'bytes=0-0'})

    @staticmethod
    def status(code: int, body: bytes = b'') -> ApiResponse:
        return ApiResponse(status=code, body=body)


@pytest.fixture
def responses():
    """Response builders."""
    return Responses


@pytest.fixture
def fake_transport():
    """Creates an empty scripted transport."""
    return FakeTransport()


@pytest.fixture
def make_file(tmp_path):
    """Factory writing a file of known bytes."""
    def _make(size: int, name: str = "sample.bin") -> str:
        path = tmp_path / name
        path.write_bytes(bytes(i % 251 for i in range(size)))
        return str(path)
    return _make


@pytest.fixture
def sample_file(make_file):
    """25-byte file (three chunks of 10/10/5 at chunk_size=10)."""
    return make_file(25)
