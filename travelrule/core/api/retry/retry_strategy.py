"""Retry strategies using Strategy Pattern."""
import asyncio
from abc import ABC, abstractmethod
from typing import Optional

from ..config import RetryConfig


class RetryStrategy(ABC):
    """Abstract retry strategy."""
    
    @abstractmethod
    def should_retry(self, status: Optional[int], retry_count: int) -> bool:
        """
        Determines if a failed attempt should be retried.
        
        Args:
            status: HTTP status, or None for a connection failure
            retry_count: Retries already performed
        """
        pass
    
    @abstractmethod
    async def wait_async(self, retry_count: int):
        """Waits before retry."""
        pass


class ExponentialBackoffStrategy(RetryStrategy):
    """Exponential backoff driven by a :class:`RetryConfig`."""
    
    def __init__(self, config: Optional[RetryConfig] = None):
        self.config = config or RetryConfig()
    
    def should_retry(self, status: Optional[int], retry_count: int) -> bool:
        """Retries connection failures and configured statuses."""
        if retry_count >= self.config.max_retries:
            return False
        return status is None or status in self.config.retry_on_status
    
    async def wait_async(self, retry_count: int):
        """Waits with exponential backoff."""
        await asyncio.sleep(self.config.calculate_delay(retry_count))
