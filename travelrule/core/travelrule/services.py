"""
Travel rule services.

One builder per localentity endpoint. Setters store a single field and
return the service so calls can be chained; ``await service.do()`` sends the
request once.

Example:
    >>> service = client.new_create_travel_rule_withdraw_service()
    >>> result = await (
    ...     service.coin('BTC')
    ...     .address('bc1q...')
    ...     .amount('0.01')
    ...     .questionnaire(questionnaire)
    ...     .do()
    ... )
"""
from typing import Any, List, Mapping, Union

from ..api.request import Operation, RequestBuilder, ResponseHandler, SecurityType
from .models import (
    CreateTravelRuleWithdrawResponse,
    DepositQuestionnaire,
    ProvideTravelRuleDepositInfoResponse,
    TravelRuleDeposit,
    WithdrawalQuestionnaire,
)


class CreateTravelRuleWithdrawService(RequestBuilder):
    """
    Submit a withdraw together with travel rule information.

    Mandatory: ``coin``, ``address``, ``amount``, ``questionnaire``.
    """

    OPERATION = Operation('POST', '/sapi/v1/localentity/withdraw/apply', SecurityType.SIGNED)
    PARAMS = (
        'questionnaire',
        'coin',
        'address',
        'amount',
        'timestamp',
        'recvWindow',
        'withdrawOrderId',
        'network',
        'addressTag',
        'transactionFeeFlag',
        'name',
        'walletType',
    )
    MANDATORY = ('coin', 'address', 'amount', 'questionnaire')
    QUESTIONNAIRE_PARAM = 'questionnaire'
    QUOTE_QUESTIONNAIRE = True

    def coin(self, value: str) -> 'CreateTravelRuleWithdrawService':
        """Set the coin (MANDATORY)."""
        return self._set('coin', value)

    def withdraw_order_id(self, value: str) -> 'CreateTravelRuleWithdrawService':
        """Set the client-side withdraw id."""
        return self._set('withdrawOrderId', value)

    def network(self, value: str) -> 'CreateTravelRuleWithdrawService':
        return self._set('network', value)

    def address(self, value: str) -> 'CreateTravelRuleWithdrawService':
        """Set the destination address (MANDATORY)."""
        return self._set('address', value)

    def address_tag(self, value: str) -> 'CreateTravelRuleWithdrawService':
        """Set the secondary address identifier (memo/tag)."""
        return self._set('addressTag', value)

    def amount(self, value: str) -> 'CreateTravelRuleWithdrawService':
        """Set the amount (MANDATORY), as a decimal string."""
        return self._set('amount', value)

    def transaction_fee_flag(self, value: bool) -> 'CreateTravelRuleWithdrawService':
        """
        For internal transfers: True returns the fee to the destination
        account, False to the departure account.
        """
        return self._set('transactionFeeFlag', value)

    def name(self, value: str) -> 'CreateTravelRuleWithdrawService':
        """Set the address book description of the address."""
        return self._set('name', value)

    def wallet_type(self, value: int) -> 'CreateTravelRuleWithdrawService':
        """Set the source wallet: 0 spot, 1 funding."""
        return self._set('walletType', value)

    def timestamp(self, value: int) -> 'CreateTravelRuleWithdrawService':
        return self._set('timestamp', value)

    def recv_window(self, value: int) -> 'CreateTravelRuleWithdrawService':
        return self._set('recvWindow', value)

    def questionnaire(
        self,
        value: Union[WithdrawalQuestionnaire, Mapping[str, Any]]
    ) -> 'CreateTravelRuleWithdrawService':
        """
        Set the questionnaire (MANDATORY).

        A plain mapping is accepted for local entities whose questionnaire
        differs from :class:`WithdrawalQuestionnaire`.
        """
        return self._set('questionnaire', value)

    def decode(self, data: Any) -> CreateTravelRuleWithdrawResponse:
        return ResponseHandler.to_object(data, CreateTravelRuleWithdrawResponse)


class ListTravelRuleDepositsService(RequestBuilder):
    """Fetch deposit history with travel rule status."""

    OPERATION = Operation('GET', '/sapi/v1/localentity/deposit/history', SecurityType.SIGNED)
    PARAMS = (
        'timestamp',
        'trId',
        'txId',
        'tranId',
        'network',
        'coin',
        'travelRuleStatus',
        'pendingQuestionnaire',
        'startTime',
        'endTime',
        'offset',
        'limit',
    )
    MANDATORY = ('timestamp',)

    def tr_id(self, value: str) -> 'ListTravelRuleDepositsService':
        """Filter by travel rule record id (comma separated for several)."""
        return self._set('trId', value)

    def tx_id(self, value: str) -> 'ListTravelRuleDepositsService':
        """Filter by on-chain transaction id (comma separated for several)."""
        return self._set('txId', value)

    def tran_id(self, value: str) -> 'ListTravelRuleDepositsService':
        """Filter by wallet transaction id (comma separated for several)."""
        return self._set('tranId', value)

    def network(self, value: str) -> 'ListTravelRuleDepositsService':
        return self._set('network', value)

    def coin(self, value: str) -> 'ListTravelRuleDepositsService':
        return self._set('coin', value)

    def travel_rule_status(self, value: int) -> 'ListTravelRuleDepositsService':
        """Filter by status: 0 completed, 1 pending, 2 failed."""
        return self._set('travelRuleStatus', value)

    def pending_questionnaire(self, value: bool) -> 'ListTravelRuleDepositsService':
        """True to only return deposits still waiting for a questionnaire."""
        return self._set('pendingQuestionnaire', value)

    def start_time(self, value: int) -> 'ListTravelRuleDepositsService':
        return self._set('startTime', value)

    def end_time(self, value: int) -> 'ListTravelRuleDepositsService':
        return self._set('endTime', value)

    def offset(self, value: int) -> 'ListTravelRuleDepositsService':
        return self._set('offset', value)

    def limit(self, value: int) -> 'ListTravelRuleDepositsService':
        return self._set('limit', value)

    def timestamp(self, value: int) -> 'ListTravelRuleDepositsService':
        """Set the request timestamp (filled from the transport clock if unset)."""
        return self._set('timestamp', value)

    def decode(self, data: Any) -> List[TravelRuleDeposit]:
        return ResponseHandler.to_list(data, TravelRuleDeposit)


class ProvideTravelRuleDepositInfoService(RequestBuilder):
    """
    Provide originator information for a deposit.

    Mandatory: ``tranId``, ``questionnaire`` and ``timestamp`` (the last one
    is filled from the transport clock when not set).
    """

    OPERATION = Operation('PUT', '/sapi/v1/localentity/deposit/provide-info', SecurityType.SIGNED)
    PARAMS = ('tranId', 'questionnaire', 'timestamp')
    MANDATORY = ('tranId', 'questionnaire', 'timestamp')
    QUESTIONNAIRE_PARAM = 'questionnaire'
    QUOTE_QUESTIONNAIRE = True

    def tran_id(self, value: int) -> 'ProvideTravelRuleDepositInfoService':
        """Set the wallet transaction id of the deposit (MANDATORY)."""
        return self._set('tranId', value)

    def questionnaire(
        self,
        value: Union[DepositQuestionnaire, Mapping[str, Any]]
    ) -> 'ProvideTravelRuleDepositInfoService':
        """Set the questionnaire (MANDATORY)."""
        return self._set('questionnaire', value)

    def timestamp(self, value: int) -> 'ProvideTravelRuleDepositInfoService':
        return self._set('timestamp', value)

    def decode(self, data: Any) -> ProvideTravelRuleDepositInfoResponse:
        return ResponseHandler.to_object(data, ProvideTravelRuleDepositInfoResponse)
