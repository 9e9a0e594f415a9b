"""Tests for the high-level client."""
import json

import pytest

from up2share import Up2ShareClient
from up2share.core.api import AsyncAPIClient, APIConfig
from up2share.core.exceptions import SettingsError
from up2share.core.settings import MemorySettings
from up2share.core.upload import CompletedNotification, ShareCreatedNotification


@pytest.fixture
def wired_transport(fake_transport, monkeypatch):
    """Makes Up2ShareClient talk to the scripted transport."""
    created = {}

    def factory(api_key, config):
        created['api_key'] = api_key
        created['config'] = config
        return fake_transport

    monkeypatch.setattr('up2share.client.AsyncAPIClient', factory)
    fake_transport.created = created
    return fake_transport


class TestClientConstruction:
    """API key resolution and configuration."""

    def test_explicit_key(self):
        client = Up2ShareClient("abc", settings=MemorySettings())

        assert isinstance(client.api, AsyncAPIClient)

    def test_key_from_settings(self, wired_transport):
        Up2ShareClient(settings=MemorySettings({'apiKey': 'stored'}))

        assert wired_transport.created['api_key'] == 'stored'

    def test_explicit_key_wins(self, wired_transport):
        Up2ShareClient("given", settings=MemorySettings({'apiKey': 'stored'}))

        assert wired_transport.created['api_key'] == 'given'

    def test_missing_key(self):
        with pytest.raises(SettingsError, match="API key not found"):
            Up2ShareClient(settings=MemorySettings())

    def test_create_config(self):
        config = Up2ShareClient.create_config(
            base_url="http://localhost:9000",
            proxy="http://proxy:8080",
            timeout=30,
            max_retries=2,
            retry_delay=0.5
        )

        assert config.base_url == "http://localhost:9000"
        assert config.proxy.url == "http://proxy:8080"
        assert config.timeout.total == 30
        assert config.retry.max_retries == 2
        assert config.retry.base_delay == 0.5

    def test_create_config_defaults(self):
        config = Up2ShareClient.create_config()

        assert config == APIConfig()


class TestClientOperations:
    """Operations routed through the scripted transport."""

    @pytest.fixture
    def client(self, wired_transport):
        return Up2ShareClient("key", settings=MemorySettings(), chunk_size=10)

    @pytest.mark.asyncio
    async def test_upload_uses_client_chunk_size(self, client, wired_transport, responses, sample_file):
        completed = []
        client.on(CompletedNotification, completed.append)
        wired_transport.queue(
            responses.created("/files?key=K"),
            responses.resume(),
            responses.resume(),
            responses.created("/files/42"),
        )

        async with client:
            result = await client.upload(sample_file, name="report.bin")

        assert result.file_id == "42"
        assert result.filename == "report.bin"
        assert len(wired_transport.calls_for('PUT')) == 3
        assert completed == [CompletedNotification(filename="report.bin", file_id="42")]
        assert wired_transport.closed

    @pytest.mark.asyncio
    async def test_upload_and_share(self, client, wired_transport, responses, make_file):
        shared = []
        client.on(ShareCreatedNotification, shared.append)
        wired_transport.queue(
            responses.created("/files?key=K"),
            responses.created("/files/5"),
            responses.status(201, json.dumps({'id': 9, 'file_id': 5}).encode()),
        )

        share = await client.upload_and_share(make_file(4), password="pw")

        assert share == {'id': 9, 'file_id': 5}
        assert wired_transport.calls[-1]['json']['file_id'] == "5"
        assert wired_transport.calls[-1]['json']['password'] == "pw"
        assert shared == [ShareCreatedNotification(share=share)]

    @pytest.mark.asyncio
    async def test_share_calls(self, client, wired_transport, responses):
        wired_transport.queue(
            responses.status(200, b'{"id": 42}'),
            responses.status(200, b'{"data": []}'),
            responses.status(200, b'{"id": 9}'),
            responses.status(204),
        )

        assert await client.get_file(42) == {'id': 42}
        assert await client.list_shares() == {'data': []}
        assert await client.get_share(9) == {'id': 9}
        assert await client.delete_share(9) is None

        assert [c['path'] for c in wired_transport.calls] == [
            '/files/42', '/shares', '/shares/9', '/shares/9'
        ]
