"""Tests for the aiohttp transport."""
import asyncio
from unittest.mock import AsyncMock
from urllib.parse import parse_qs, urlsplit

import aiohttp
import pytest

from travelrule.core.api import (
    APIConfig,
    AsyncAPIClient,
    HMACSigner,
    Operation,
    Request,
    RetryConfig,
    SecurityType,
    Transport,
)
from travelrule.core.exceptions import (
    APIError,
    DecodingError,
    TransportError,
    ValidationError,
)

SECRET = 'test-secret'
SIGNED_GET = Operation('GET', '/sapi/v1/test', SecurityType.SIGNED)
SIGNED_PUT = Operation('PUT', '/sapi/v1/test', SecurityType.SIGNED)
KEYED_GET = Operation('GET', '/sapi/v1/keyed', SecurityType.API_KEY)


@pytest.fixture
def config():
    return APIConfig(base_url='https://api.example.com', api_key='key-123', secret_key=SECRET)


@pytest.fixture
def client(config):
    return AsyncAPIClient(config)


class TestPrepare:
    """Test suite for request preparation and signing."""

    def test_is_transport(self, client):
        """Test the client satisfies the Transport protocol."""
        assert isinstance(client, Transport)

    def test_signed_get(self, client):
        """Test params and signature travel in the query string."""
        request = Request(SIGNED_GET, params={'coin': 'BTC', 'timestamp': 1000})

        url, headers, body = client.prepare(request)

        expected_query = 'coin=BTC&timestamp=1000'
        signature = HMACSigner(SECRET).sign(expected_query)
        assert url == f'https://api.example.com/sapi/v1/test?{expected_query}&signature={signature}'
        assert headers['X-MBX-APIKEY'] == 'key-123'
        assert body is None

    def test_signed_put_uses_form_body(self, client):
        """Test write methods send a form body and sign it."""
        request = Request(SIGNED_PUT, params={'tranId': 7, 'timestamp': 1000})

        url, headers, body = client.prepare(request)

        assert body == 'tranId=7&timestamp=1000'
        assert headers['Content-Type'] == 'application/x-www-form-urlencoded'
        assert urlsplit(url).query == f'signature={HMACSigner(SECRET).sign(body)}'

    def test_booleans_lowercase(self, client):
        """Test booleans are rendered as true/false on the wire."""
        request = Request(SIGNED_GET, params={'pendingQuestionnaire': True, 'timestamp': 1})

        url, _, _ = client.prepare(request)

        assert parse_qs(urlsplit(url).query)['pendingQuestionnaire'] == ['true']

    def test_timestamp_filled(self, client):
        """Test a missing timestamp is filled from the client clock."""
        client.time_offset = 0
        url, _, _ = client.prepare(Request(SIGNED_GET))

        assert 'timestamp' in parse_qs(urlsplit(url).query)

    def test_recv_window_from_config(self, config):
        """Test the configured recvWindow is added."""
        config.recv_window = 5000
        url, _, _ = AsyncAPIClient(config).prepare(Request(SIGNED_GET, params={'timestamp': 1}))

        assert parse_qs(urlsplit(url).query)['recvWindow'] == ['5000']

    def test_recv_window_option_overrides(self, config):
        """Test a request option beats both config and params."""
        config.recv_window = 5000
        request = Request(SIGNED_GET, params={'timestamp': 1, 'recvWindow': 1000}, recv_window=7000)

        url, _, _ = AsyncAPIClient(config).prepare(request)

        assert parse_qs(urlsplit(url).query)['recvWindow'] == ['7000']

    def test_param_recv_window_kept(self, config):
        """Test an explicit recvWindow param beats the config default."""
        config.recv_window = 5000
        request = Request(SIGNED_GET, params={'timestamp': 1, 'recvWindow': 1000})

        url, _, _ = AsyncAPIClient(config).prepare(request)

        assert parse_qs(urlsplit(url).query)['recvWindow'] == ['1000']

    def test_api_key_only(self, client):
        """Test API_KEY requests carry the header but no signature."""
        url, headers, _ = client.prepare(Request(KEYED_GET, params={'a': 1}))

        assert headers['X-MBX-APIKEY'] == 'key-123'
        assert 'signature' not in url
        assert 'timestamp' not in url

    def test_public_request(self, client):
        """Test public requests are sent untouched."""
        url, headers, body = client.prepare(Request(Operation('GET', '/api/v3/time')))

        assert url == 'https://api.example.com/api/v3/time'
        assert 'X-MBX-APIKEY' not in headers
        assert body is None

    def test_missing_api_key(self):
        """Test signed requests need an API key."""
        client = AsyncAPIClient(APIConfig(secret_key=SECRET))

        with pytest.raises(ValidationError, match='API key'):
            client.prepare(Request(SIGNED_GET))

    def test_missing_secret(self):
        """Test signed requests need a secret."""
        client = AsyncAPIClient(APIConfig(api_key='key'))

        with pytest.raises(ValidationError, match='Secret'):
            client.prepare(Request(SIGNED_GET))

    def test_custom_headers_kept(self, client):
        """Test request headers are forwarded."""
        _, headers, _ = client.prepare(Request(SIGNED_GET, headers={'X-Trace': 'abc'}))

        assert headers['X-Trace'] == 'abc'


class TestCallAPI:
    """Test suite for call_api."""

    @pytest.mark.asyncio
    async def test_success_returns_body(self, client):
        """Test a 2xx body is returned as-is."""
        client._send = AsyncMock(return_value=(200, b'{"trId": 1}'))

        body = await client.call_api(Request(SIGNED_GET))

        assert body == b'{"trId": 1}'
        method, url, headers, data = client._send.await_args.args
        assert method == 'GET'
        assert 'signature=' in url

    @pytest.mark.asyncio
    async def test_api_error(self, client):
        """Test exchange error bodies become APIError."""
        client._send = AsyncMock(return_value=(400, b'{"code": -1022, "msg": "Signature for this request is not valid."}'))

        with pytest.raises(APIError) as exc_info:
            await client.call_api(Request(SIGNED_GET))

        assert exc_info.value.status == 400
        assert exc_info.value.code == -1022
        assert 'Signature' in exc_info.value.msg

    @pytest.mark.asyncio
    async def test_http_error_without_code(self, client):
        """Test other non-2xx responses become TransportError."""
        client._send = AsyncMock(return_value=(502, b'<html>Bad gateway</html>'))

        with pytest.raises(TransportError) as exc_info:
            await client.call_api(Request(SIGNED_GET))

        assert not isinstance(exc_info.value, APIError)
        assert exc_info.value.status == 502
        assert exc_info.value.body == b'<html>Bad gateway</html>'

    @pytest.mark.asyncio
    async def test_network_error(self, client):
        """Test aiohttp errors become TransportError."""
        client._send = AsyncMock(side_effect=aiohttp.ClientConnectionError("refused"))

        with pytest.raises(TransportError, match='Network error'):
            await client.call_api(Request(SIGNED_GET))

    @pytest.mark.asyncio
    async def test_timeout(self, client):
        """Test timeouts become TransportError."""
        client._send = AsyncMock(side_effect=asyncio.TimeoutError())

        with pytest.raises(TransportError):
            await client.call_api(Request(SIGNED_GET))

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, client):
        """Test cancellation is not turned into a TransportError."""
        client._send = AsyncMock(side_effect=asyncio.CancelledError())

        with pytest.raises(asyncio.CancelledError):
            await client.call_api(Request(SIGNED_GET))

    @pytest.mark.asyncio
    async def test_no_retry_by_default(self, client):
        """Test failures are not retried unless configured."""
        client._send = AsyncMock(return_value=(503, b''))

        with pytest.raises(TransportError):
            await client.call_api(Request(SIGNED_GET))

        assert client._send.await_count == 1

    @pytest.mark.asyncio
    async def test_retry_when_configured(self, config):
        """Test configured statuses are retried."""
        config.retry = RetryConfig(max_retries=2, base_delay=0, retry_on_status=(503,))
        client = AsyncAPIClient(config)
        client._send = AsyncMock(side_effect=[(503, b''), (200, b'[]')])

        assert await client.call_api(Request(SIGNED_GET)) == b'[]'
        assert client._send.await_count == 2

    @pytest.mark.asyncio
    async def test_retry_exhausted(self, config):
        """Test the last failure is raised after the retries."""
        config.retry = RetryConfig(max_retries=1, base_delay=0)
        client = AsyncAPIClient(config)
        client._send = AsyncMock(side_effect=aiohttp.ClientConnectionError("down"))

        with pytest.raises(TransportError):
            await client.call_api(Request(SIGNED_GET))

        assert client._send.await_count == 2

    @pytest.mark.asyncio
    async def test_closed_client(self, client):
        """Test a closed client refuses requests."""
        await client.close()

        with pytest.raises(TransportError, match='closed'):
            await client.call_api(Request(SIGNED_GET))


class TestServerTime:
    """Test suite for server time synchronisation."""

    @pytest.mark.asyncio
    async def test_sync_time_sets_offset(self, client, monkeypatch):
        """Test the offset is server time minus local time."""
        monkeypatch.setattr('travelrule.core.api.async_client.time.time', lambda: 1000.0)
        client._send = AsyncMock(return_value=(200, b'{"serverTime": 1000250}'))

        offset = await client.sync_time()

        assert offset == 250
        assert client.timestamp() == 1000250

    @pytest.mark.asyncio
    async def test_sync_time_bad_body(self, client):
        """Test an unexpected body raises DecodingError."""
        client._send = AsyncMock(return_value=(200, b'{"time": 1}'))

        with pytest.raises(DecodingError):
            await client.sync_time()
