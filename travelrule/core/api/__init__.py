"""Travel rule API layer: request building, signing and transport."""
from .config import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig, RetryConfig
from .signing import KeyType, Signer, HMACSigner, RSASigner, Ed25519Signer, create_signer
from .protocols import Transport
from .request import (
    SecurityType,
    Operation,
    Request,
    RequestBuilder,
    ResponseHandler,
    with_recv_window,
    with_header,
    with_headers,
)
from .async_client import AsyncAPIClient

__all__ = [
    # Transport
    'Transport',
    'AsyncAPIClient',
    
    # Requests
    'SecurityType',
    'Operation',
    'Request',
    'RequestBuilder',
    'ResponseHandler',
    'with_recv_window',
    'with_header',
    'with_headers',
    
    # Signing
    'KeyType',
    'Signer',
    'HMACSigner',
    'RSASigner',
    'Ed25519Signer',
    'create_signer',
    
    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
]
