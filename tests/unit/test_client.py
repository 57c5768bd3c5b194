"""Tests for TravelRuleClient."""
from unittest.mock import AsyncMock

import pytest

from travelrule import (
    APIConfig,
    AsyncAPIClient,
    CreateTravelRuleWithdrawService,
    ListTravelRuleDepositsService,
    ProvideTravelRuleDepositInfoService,
    Transport,
    TravelRuleClient,
    TravelRuleError,
)


class ClockOnlyTransport:
    """Transport implementing only the request-sending protocol."""

    async def call_api(self, request):
        return b'{}'

    def timestamp(self):
        return 0


class TestTravelRuleClient:
    """Test suite for the client facade."""

    def test_default_transport(self):
        """Test an AsyncAPIClient is created from the config."""
        config = APIConfig(api_key='k', secret_key='s')
        client = TravelRuleClient(config)

        assert isinstance(client.transport, AsyncAPIClient)
        assert client.transport.config is config

    def test_services_share_transport(self, transport):
        """Test every factory binds the client's transport."""
        client = TravelRuleClient(transport=transport)

        services = [
            client.new_create_travel_rule_withdraw_service(),
            client.new_list_travel_rule_deposits_service(),
            client.new_provide_travel_rule_deposit_info_service(),
        ]

        assert isinstance(services[0], CreateTravelRuleWithdrawService)
        assert isinstance(services[1], ListTravelRuleDepositsService)
        assert isinstance(services[2], ProvideTravelRuleDepositInfoService)
        assert all(service._transport is transport for service in services)

    def test_new_service_each_call(self, transport):
        """Test factories return fresh single-use builders."""
        client = TravelRuleClient(transport=transport)

        assert client.new_list_travel_rule_deposits_service() is not client.new_list_travel_rule_deposits_service()

    @pytest.mark.asyncio
    async def test_injected_transport_not_closed(self, transport):
        """Test a caller-provided transport is left open."""
        transport.close = AsyncMock()

        async with TravelRuleClient(transport=transport):
            pass

        transport.close.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_owned_transport_closed(self):
        """Test the client closes the transport it created."""
        client = TravelRuleClient(APIConfig())
        client.transport.close = AsyncMock()

        await client.close()

        client.transport.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_sync_time(self, transport):
        """Test sync_time delegates to the transport."""
        transport.sync_time = AsyncMock(return_value=42)

        assert await TravelRuleClient(transport=transport).sync_time() == 42

    @pytest.mark.asyncio
    async def test_sync_time_unsupported_transport(self):
        """Test a transport without a server clock raises TravelRuleError."""
        transport = ClockOnlyTransport()
        assert isinstance(transport, Transport)

        with pytest.raises(TravelRuleError, match='server time'):
            await TravelRuleClient(transport=transport).sync_time()

    @pytest.mark.asyncio
    async def test_end_to_end_list(self, transport, sample_deposits_body):
        """Test listing deposits through the facade."""
        transport.call_api.return_value = sample_deposits_body

        async with TravelRuleClient(transport=transport) as client:
            records = await client.new_list_travel_rule_deposits_service().coin('BTC').do()

        assert len(records) == 2
        request = transport.call_api.await_args.args[0]
        assert request.params['coin'] == 'BTC'
