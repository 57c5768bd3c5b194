"""
Async API client.

Default authenticated transport for the request builders: signs requests,
sends them over a shared aiohttp session and maps HTTP failures to
:class:`~travelrule.core.exceptions.TransportError`.
"""
import json
import time
import asyncio
import logging
from typing import Dict, Optional, Tuple
import aiohttp

from .config import APIConfig
from .signing import Signer, create_signer
from .request import Operation, Request, encode_params
from .retry import RetryStrategy, ExponentialBackoffStrategy
from ..exceptions import APIError, DecodingError, TransportError, ValidationError
from ..logging import get_logger

API_KEY_HEADER = 'X-MBX-APIKEY'
FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'

SERVER_TIME = Operation('GET', '/api/v3/time')

# Methods whose parameters travel in the query string
QUERY_METHODS = ('GET', 'DELETE')


class AsyncAPIClient:
    """
    Asynchronous signed-request transport.

    Features:
    - HMAC, RSA and Ed25519 request signing
    - Server time synchronisation for timestamps
    - Configurable proxy, SSL, timeouts
    - Opt-in retry with exponential backoff
    - Connection pooling

    Example:
        >>> config = APIConfig(api_key='...', secret_key='...')
        >>> async with AsyncAPIClient(config) as client:
        ...     body = await client.call_api(request)
    """

    def __init__(
        self,
        config: Optional[APIConfig] = None,
        signer: Optional[Signer] = None,
        retry_strategy: Optional[RetryStrategy] = None
    ):
        """
        Initialize async API client.

        Args:
            config: API configuration (uses defaults if not provided)
            signer: Request signer (built from the config secret if omitted)
            retry_strategy: Retry policy (built from ``config.retry`` if omitted)
        """
        self._config = config or APIConfig.default()
        if signer is None and self._config.secret_key:
            signer = create_signer(self._config.key_type, self._config.secret_key)
        self._signer = signer
        self._retry = retry_strategy or ExponentialBackoffStrategy(self._config.retry)
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._closed = False
        self._time_offset = 0

        self._logger = get_logger('travelrule.api')
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            self._logger.setLevel(self._config.log_level)

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    @property
    def time_offset(self) -> int:
        """Server time minus local time, in milliseconds."""
        return self._time_offset

    @time_offset.setter
    def time_offset(self, value: int):
        self._time_offset = int(value)

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
        """Close client and release resources."""
        self._closed = True

        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

        if self._connector and not self._connector.closed:
            await self._connector.close()
            self._connector = None

    def timestamp(self) -> int:
        """Current time in milliseconds, adjusted by the server offset."""
        return int(time.time() * 1000) + self._time_offset

    def prepare(self, request: Request) -> Tuple[str, Dict[str, str], Optional[str]]:
        """
        Turn a request into URL, headers and form body.

        Signed requests get ``timestamp`` and ``recvWindow`` when missing and
        a ``signature`` over the query string followed by the body.

        Returns:
            Tuple of (url, headers, body)

        Raises:
            ValidationError: If credentials required by the request are missing
        """
        params = dict(request.params)
        headers = dict(request.headers)

        if request.operation.requires_api_key:
            if not self._config.api_key:
                raise ValidationError("API key is required for this endpoint", field='api_key')
            headers[API_KEY_HEADER] = self._config.api_key

        if request.operation.requires_signature:
            if self._signer is None:
                raise ValidationError("Secret key is required to sign requests", field='secret_key')
            params.setdefault('timestamp', self.timestamp())
            if request.recv_window is not None:
                params['recvWindow'] = request.recv_window
            elif self._config.recv_window is not None:
                params.setdefault('recvWindow', self._config.recv_window)

        if request.method.upper() in QUERY_METHODS:
            query, body = encode_params(params), ''
        else:
            query, body = '', encode_params(params)

        if body:
            headers['Content-Type'] = FORM_CONTENT_TYPE

        if request.operation.requires_signature:
            signature = encode_params({'signature': self._signer.sign(query + body)})
            query = f"{query}&{signature}" if query else signature

        url = f"{self._config.base_url.rstrip('/')}{request.endpoint}"
        if query:
            url = f"{url}?{query}"

        return url, headers, body or None

    async def call_api(self, request: Request) -> bytes:
        """
        Sign and send a request.

        Args:
            request: Request to send

        Returns:
            Raw body of the 2xx response

        Raises:
            APIError: Non-2xx response carrying an exchange error code
            TransportError: Any other HTTP or network failure
        """
        if self._closed:
            raise TransportError("Client is closed")

        url, headers, body = self.prepare(request)
        method = request.method.upper()
        retry_count = 0

        while True:
            self._logger.debug(f"{method} {request.endpoint} (attempt {retry_count + 1})")
            try:
                status, data = await self._send(method, url, headers, body)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                if self._retry.should_retry(None, retry_count):
                    self._logger.warning(
                        f"Retrying {method} {request.endpoint} after network error, attempt {retry_count + 1}"
                    )
                    await self._retry.wait_async(retry_count)
                    retry_count += 1
                    continue
                self._logger.error(f"Network error on {method} {request.endpoint}: {e!r}")
                raise TransportError(f"Network error: {e!r}") from e

            if status >= 400:
                if self._retry.should_retry(status, retry_count):
                    self._logger.warning(
                        f"Retrying {method} {request.endpoint} after HTTP {status}, attempt {retry_count + 1}"
                    )
                    await self._retry.wait_async(retry_count)
                    retry_count += 1
                    continue
                raise self._error_from_response(status, data)

            self._logger.debug(f"Response {status}: {data[:500]!r}")
            return data

    async def _send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[str]
    ) -> Tuple[int, bytes]:
        """Perform one HTTP exchange and return (status, raw body)."""
        session = await self._ensure_session()
        async with session.request(
            method,
            url,
            data=body,
            headers=headers,
            proxy=self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None
        ) as response:
            return response.status, await response.read()

    @staticmethod
    def _error_from_response(status: int, data: bytes) -> TransportError:
        """Build the error for a non-2xx response."""
        try:
            payload = json.loads(data)
        except (UnicodeDecodeError, ValueError):
            payload = None

        if isinstance(payload, dict) and 'code' in payload and 'msg' in payload:
            return APIError(status, payload['code'], payload['msg'], body=data)

        text = data.decode('utf-8', errors='replace') if data else ''
        return TransportError(f"HTTP {status}: {text[:200]}", status=status, body=data)

    async def sync_time(self) -> int:
        """
        Align request timestamps with the exchange clock.

        Returns:
            New offset in milliseconds (server minus local)
        """
        before = int(time.time() * 1000)
        data = await self.call_api(Request(SERVER_TIME))
        after = int(time.time() * 1000)

        try:
            server_time = json.loads(data)['serverTime']
        except (ValueError, KeyError, TypeError) as e:
            raise DecodingError(f"Unexpected server time response: {e}", body=data) from e
        if not isinstance(server_time, int) or isinstance(server_time, bool):
            raise DecodingError("serverTime is not an integer", body=data)

        self._time_offset = server_time - (before + after) // 2
        self._logger.debug(f"Server time offset: {self._time_offset} ms")
        return self._time_offset
