"""
TravelRuleClient - High-level async client for the travel rule endpoints.

Example:
    >>> config = APIConfig.from_env()
    >>> async with TravelRuleClient(config) as client:
    ...     deposits = await (
    ...         client.new_list_travel_rule_deposits_service()
    ...         .pending_questionnaire(True)
    ...         .do()
    ...     )
"""
from typing import Optional

from .core.api import APIConfig, AsyncAPIClient, Transport
from .core.exceptions import TravelRuleError
from .core.logging import get_logger
from .core.travelrule import (
    CreateTravelRuleWithdrawService,
    ListTravelRuleDepositsService,
    ProvideTravelRuleDepositInfoService,
)

logger = get_logger(__name__)


class TravelRuleClient:
    """
    Factory for travel rule request builders.
    
    All services created by one client share its transport. Each service is
    single-use; create a new one per request.
    """
    
    def __init__(
        self,
        config: Optional[APIConfig] = None,
        transport: Optional[Transport] = None
    ):
        """
        Initialize client.
        
        Args:
            config: API configuration (ignored when ``transport`` is given)
            transport: Custom transport, e.g. a fake in tests
        """
        if transport is None:
            transport = AsyncAPIClient(config)
            self._owns_transport = True
        else:
            self._owns_transport = False
        self._transport = transport
    
    @property
    def transport(self) -> Transport:
        return self._transport
    
    async def __aenter__(self) -> 'TravelRuleClient':
        if self._owns_transport:
            await self._transport.__aenter__()
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
    
    async def close(self):
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self._transport.close()
    
    async def sync_time(self) -> int:
        """
        Align request timestamps with the exchange clock.
        
        Returns:
            Offset in milliseconds (server minus local)

        Raises:
            TravelRuleError: If the transport has no server clock support
        """
        sync = getattr(self._transport, 'sync_time', None)
        if sync is None:
            raise TravelRuleError(
                f"{type(self._transport).__name__} does not support server time synchronisation"
            )
        offset = await sync()
        logger.info(f"Synchronised with server time, offset {offset} ms")
        return offset
    
    def new_create_travel_rule_withdraw_service(self) -> CreateTravelRuleWithdrawService:
        """Builder for ``POST /sapi/v1/localentity/withdraw/apply``."""
        return CreateTravelRuleWithdrawService(self._transport)
    
    def new_list_travel_rule_deposits_service(self) -> ListTravelRuleDepositsService:
        """Builder for ``GET /sapi/v1/localentity/deposit/history``."""
        return ListTravelRuleDepositsService(self._transport)
    
    def new_provide_travel_rule_deposit_info_service(self) -> ProvideTravelRuleDepositInfoService:
        """Builder for ``PUT /sapi/v1/localentity/deposit/provide-info``."""
        return ProvideTravelRuleDepositInfoService(self._transport)
