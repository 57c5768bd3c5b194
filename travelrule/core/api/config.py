"""
API configuration module.

Provides configuration for the travel rule API client: endpoint, credentials,
connection behaviour and the default receive window of signed requests.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Mapping
import os
import ssl

from ..exceptions import ValidationError
from .signing import KeyType


DEFAULT_BASE_URL = 'https://api.binance.com'
TESTNET_BASE_URL = 'https://testnet.binance.vision'

ENV_PREFIX = 'TRAVELRULE_'


@dataclass
class ProxyConfig:
    """
    Proxy configuration.

    Supports HTTP and HTTPS proxies.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def to_aiohttp_proxy(self) -> Optional[str]:
        """Convert to aiohttp proxy format."""
        if not self.url:
            return None

        if self.username and self.password and '://' in self.url:
            protocol, rest = self.url.split('://', 1)
            return f"{protocol}://{self.username}:{self.password}@{rest}"

        return self.url


@dataclass
class SSLConfig:
    """SSL/TLS configuration."""
    verify: bool = True
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    ca_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self):
        """Create SSL context from configuration (False disables verification)."""
        if not self.verify:
            return False

        context = ssl.create_default_context()

        if self.ca_file:
            context.load_verify_locations(self.ca_file)

        if self.cert_file:
            context.load_cert_chain(
                self.cert_file,
                keyfile=self.key_file
            )

        context.check_hostname = self.check_hostname

        return context


@dataclass
class TimeoutConfig:
    """Timeout configuration, in seconds."""
    total: float = 30.0
    connect: float = 10.0
    sock_read: float = 30.0
    sock_connect: float = 10.0

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )


@dataclass
class RetryConfig:
    """
    Retry configuration for the transport.

    Withdraw submissions are not idempotent, so nothing is retried unless
    ``max_retries`` is raised explicitly.
    """
    max_retries: int = 0
    base_delay: float = 0.5
    max_delay: float = 8.0
    exponential_base: float = 2.0
    retry_on_status: tuple = (429, 503)

    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay for given attempt number."""
        delay = self.base_delay * (self.exponential_base ** attempt)
        return min(delay, self.max_delay)


@dataclass
class APIConfig:
    """
    Complete API configuration.

    Centralizes endpoint, credential and connection options for
    :class:`~travelrule.core.api.async_client.AsyncAPIClient`.
    """
    base_url: str = DEFAULT_BASE_URL

    # Credentials
    api_key: str = ''
    secret_key: str = field(default='', repr=False)
    key_type: KeyType = KeyType.HMAC

    # Default recvWindow (ms) for signed requests, None to omit it
    recv_window: Optional[int] = None

    user_agent: str = 'travelrule/1.0.0'

    # Sub-configurations
    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)

    extra_headers: Dict[str, str] = field(default_factory=dict)

    log_level: int = 20  # logging.INFO

    limit_per_host: int = 10
    limit: int = 100

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'APIConfig':
        """Create configuration with proxy."""
        return cls(
            proxy=ProxyConfig(url=proxy_url),
            **kwargs
        )

    @classmethod
    def insecure(cls, **kwargs) -> 'APIConfig':
        """Create configuration with SSL verification disabled."""
        return cls(
            ssl=SSLConfig(verify=False, check_hostname=False),
            **kwargs
        )

    @classmethod
    def testnet(cls, **kwargs) -> 'APIConfig':
        """Create configuration pointing at the spot testnet."""
        return cls(base_url=TESTNET_BASE_URL, **kwargs)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **kwargs) -> 'APIConfig':
        """
        Create configuration from ``TRAVELRULE_*`` environment variables.

        Reads ``TRAVELRULE_API_KEY``, ``TRAVELRULE_SECRET_KEY``,
        ``TRAVELRULE_KEY_TYPE``, ``TRAVELRULE_BASE_URL`` and
        ``TRAVELRULE_RECV_WINDOW``. Explicit keyword arguments win.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Raises:
            ValidationError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {}

        if env.get(ENV_PREFIX + 'API_KEY'):
            values['api_key'] = env[ENV_PREFIX + 'API_KEY']
        if env.get(ENV_PREFIX + 'SECRET_KEY'):
            values['secret_key'] = env[ENV_PREFIX + 'SECRET_KEY']
        if env.get(ENV_PREFIX + 'BASE_URL'):
            values['base_url'] = env[ENV_PREFIX + 'BASE_URL']

        key_type = env.get(ENV_PREFIX + 'KEY_TYPE')
        if key_type:
            try:
                values['key_type'] = KeyType(key_type.upper())
            except ValueError:
                raise ValidationError(
                    f"Unsupported key type: {key_type}",
                    field=ENV_PREFIX + 'KEY_TYPE'
                )

        recv_window = env.get(ENV_PREFIX + 'RECV_WINDOW')
        if recv_window:
            try:
                values['recv_window'] = int(recv_window)
            except ValueError:
                raise ValidationError(
                    f"recvWindow must be an integer, got {recv_window!r}",
                    field=ENV_PREFIX + 'RECV_WINDOW'
                )

        values.update(kwargs)
        return cls(**values)

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
