"""Request primitives shared by the builders and the transport."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional
from urllib.parse import urlencode


class SecurityType(Enum):
    """How a request is authenticated."""
    NONE = 'none'
    API_KEY = 'api_key'
    SIGNED = 'signed'


@dataclass(frozen=True)
class Operation:
    """Static definition of a remote operation."""
    method: str
    endpoint: str
    sec_type: SecurityType = SecurityType.NONE

    @property
    def requires_api_key(self) -> bool:
        return self.sec_type in (SecurityType.API_KEY, SecurityType.SIGNED)

    @property
    def requires_signature(self) -> bool:
        return self.sec_type is SecurityType.SIGNED


def format_param(value: Any) -> str:
    """Render a parameter value the way the exchange expects it."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def encode_params(params: Mapping[str, Any]) -> str:
    """URL-encode parameters, keeping their insertion order."""
    return urlencode([(key, format_param(value)) for key, value in params.items()])


@dataclass
class Request:
    """
    A single outgoing call.

    ``params`` keeps native Python values; rendering to strings happens
    only when the transport encodes the request.
    """
    operation: Operation
    params: Dict[str, Any] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    recv_window: Optional[int] = None

    @property
    def method(self) -> str:
        return self.operation.method

    @property
    def endpoint(self) -> str:
        return self.operation.endpoint

    @property
    def sec_type(self) -> SecurityType:
        return self.operation.sec_type

    def set_param(self, key: str, value: Any) -> 'Request':
        """Set one parameter, replacing any previous value."""
        self.params[key] = value
        return self

    def set_params(self, params: Mapping[str, Any]) -> 'Request':
        """Set several parameters at once."""
        for key, value in params.items():
            self.params[key] = value
        return self


RequestOption = Callable[[Request], None]


def with_recv_window(recv_window: int) -> RequestOption:
    """Override the recvWindow (ms) sent with a signed request."""
    def option(request: Request) -> None:
        request.recv_window = recv_window
    return option


def with_header(key: str, value: str) -> RequestOption:
    """Add a single HTTP header to a request."""
    def option(request: Request) -> None:
        request.headers[key] = value
    return option


def with_headers(headers: Mapping[str, str]) -> RequestOption:
    """Add several HTTP headers to a request."""
    def option(request: Request) -> None:
        request.headers.update(headers)
    return option
