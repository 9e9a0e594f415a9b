"""Tests for AsyncAPIClient against a local aiohttp server."""
import asyncio
from contextlib import asynccontextmanager

import pytest
from aiohttp import web
from aiohttp import test_utils

from up2share.core.api import AsyncAPIClient, APIConfig, TimeoutConfig
from up2share.core.exceptions import TransportError


async def echo_handler(request: web.Request) -> web.Response:
    body = await request.read()
    return web.json_response({
        'method': request.method,
        'path': request.path,
        'api_key': request.headers.get('X-Api-Key'),
        'content_type': request.headers.get('Content-Type'),
        'user_agent': request.headers.get('User-Agent'),
        'query': dict(request.query),
        'body': body.decode('utf-8'),
    })


async def resume_handler(request: web.Request) -> web.Response:
    await request.read()
    return web.Response(status=308, headers={'Range': 'bytes=0-9', 'Location': '/elsewhere'})


async def created_handler(request: web.Request) -> web.Response:
    return web.Response(status=201, headers={'location': '/files/42'})


async def slow_handler(request: web.Request) -> web.Response:
    await asyncio.sleep(1)
    return web.Response(text="late")


@asynccontextmanager
async def running_server():
    app = web.Application()
    app.router.add_route('*', '/echo', echo_handler)
    app.router.add_put('/upload', resume_handler)
    app.router.add_put('/done', created_handler)
    app.router.add_get('/slow', slow_handler)

    server = test_utils.TestServer(app)
    await server.start_server()
    try:
        yield f"http://{server.host}:{server.port}"
    finally:
        await server.close()


class TestAsyncAPIClient:
    """Test suite for AsyncAPIClient."""

    def test_requires_api_key(self):
        with pytest.raises(ValueError):
            AsyncAPIClient("")

    def test_default_base_url(self):
        assert AsyncAPIClient("key").base_url == "https://api.up2sha.re"

    @pytest.mark.parametrize("path,expected", [
        ("/files/1", "https://api.up2sha.re/files/1"),
        ("shares", "https://api.up2sha.re/shares"),
        ("https://upload.example.com/x?key=1", "https://upload.example.com/x?key=1"),
    ])
    def test_build_url(self, path, expected):
        assert AsyncAPIClient("key").build_url(path) == expected

    def test_build_url_trailing_slash_base(self):
        client = AsyncAPIClient("key", APIConfig(base_url="http://localhost:8080/"))

        assert client.build_url("/files") == "http://localhost:8080/files"

    @pytest.mark.asyncio
    async def test_api_key_header_and_params(self):
        async with running_server() as base_url:
            async with AsyncAPIClient("secret", APIConfig(base_url=base_url)) as api:
                response = await api.get('/echo', params={'page': 2})

        payload = response.json()
        assert response.status == 200
        assert payload['api_key'] == "secret"
        assert payload['query'] == {'page': '2'}
        assert payload['user_agent'].startswith('up2share/')

    @pytest.mark.asyncio
    async def test_json_body(self):
        async with running_server() as base_url:
            async with AsyncAPIClient("secret", APIConfig(base_url=base_url)) as api:
                response = await api.post('/echo', json={'filename': 'a.bin'})

        payload = response.json()
        assert payload['content_type'] == 'application/json'
        assert payload['body'] == '{"filename": "a.bin"}'

    @pytest.mark.asyncio
    async def test_json_body_keeps_caller_content_type(self):
        async with running_server() as base_url:
            async with AsyncAPIClient("secret", APIConfig(base_url=base_url)) as api:
                response = await api.post(
                    '/echo',
                    json={'filename': 'a.bin'},
                    headers={'Content-Type': 'application/octet-stream'}
                )

        assert response.json()['content_type'] == 'application/octet-stream'

    @pytest.mark.asyncio
    async def test_data_and_json_exclusive(self):
        api = AsyncAPIClient("secret")
        try:
            with pytest.raises(ValueError):
                await api.post('/echo', data=b"x", json={})
        finally:
            await api.close()

    @pytest.mark.asyncio
    async def test_308_is_not_followed(self):
        async with running_server() as base_url:
            async with AsyncAPIClient("secret", APIConfig(base_url=base_url)) as api:
                response = await api.put('/upload', data=b"0123456789")

        assert response.status == 308
        assert response.header('range') == 'bytes=0-9'

    @pytest.mark.asyncio
    async def test_absolute_url_and_case_insensitive_location(self):
        async with running_server() as base_url:
            async with AsyncAPIClient("secret") as api:
                response = await api.put(f"{base_url}/done", data=b"x")

        assert response.status == 201
        assert response.location == '/files/42'

    @pytest.mark.asyncio
    async def test_timeout_raises_transport_error(self):
        async with running_server() as base_url:
            config = APIConfig(base_url=base_url, timeout=TimeoutConfig(total=0.2))
            async with AsyncAPIClient("secret", config) as api:
                with pytest.raises(TransportError, match="timed out"):
                    await api.get('/slow')

    @pytest.mark.asyncio
    async def test_connection_error_raises_transport_error(self):
        config = APIConfig(base_url="http://127.0.0.1:1", timeout=TimeoutConfig(total=5))
        async with AsyncAPIClient("secret", config) as api:
            with pytest.raises(TransportError) as exc_info:
                await api.get('/files/1')

        assert exc_info.value.__cause__ is not None

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        api = AsyncAPIClient("secret")
        await api._ensure_session()

        await api.close()
        await api.close()

        assert api._session is None
