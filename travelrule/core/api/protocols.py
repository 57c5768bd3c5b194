"""
Protocol definitions for the API layer.

Request builders depend on this interface only, so any collaborator that can
send a signed request (a fake in tests, a different HTTP stack) can replace
the default aiohttp client.
"""
from typing import Protocol, runtime_checkable

from .request.request import Request


@runtime_checkable
class Transport(Protocol):
    """
    Protocol for authenticated transports.
    
    Implementations must be safe to share between concurrently running
    builders.
    """
    
    async def call_api(self, request: Request) -> bytes:
        """
        Sign (if required) and send a request.
        
        Args:
            request: Request assembled by a builder
            
        Returns:
            Raw response body of a successful (2xx) response
            
        Raises:
            TransportError: On network failure or non-2xx status
        """
        ...
    
    def timestamp(self) -> int:
        """
        Current timestamp in milliseconds, adjusted to server time.
        """
        ...
