"""
travelrule - Async Python client for exchange travel rule endpoints.

Usage:
    >>> from travelrule import TravelRuleClient, APIConfig, WithdrawalQuestionnaire
    >>> 
    >>> async with TravelRuleClient(APIConfig.from_env()) as client:
    ...     result = await (
    ...         client.new_create_travel_rule_withdraw_service()
    ...         .coin('BTC')
    ...         .address('bc1q...')
    ...         .amount('0.01')
    ...         .questionnaire(WithdrawalQuestionnaire(
    ...             is_address_owner=1, send_to=1, declaration=True))
    ...         .do()
    ...     )
"""
import logging
from .client import TravelRuleClient

from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    RetryConfig,
    AsyncAPIClient,
    Transport,
    KeyType,
    Operation,
    SecurityType,
    Request,
    RequestBuilder,
    with_recv_window,
    with_header,
    with_headers,
)

from .core.travelrule import (
    WithdrawalQuestionnaire,
    DepositQuestionnaire,
    CreateTravelRuleWithdrawResponse,
    ProvideTravelRuleDepositInfoResponse,
    TravelRuleDeposit,
    CreateTravelRuleWithdrawService,
    ListTravelRuleDepositsService,
    ProvideTravelRuleDepositInfoService,
)

from .core.exceptions import (
    TravelRuleError,
    ValidationError,
    SerializationError,
    TransportError,
    APIError,
    DecodingError,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for travelrule modules.
    
    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'travelrule',
        'travelrule.api',
        'travelrule.request',
    ]
    
    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'TravelRuleClient',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
    'AsyncAPIClient',
    'Transport',
    'KeyType',
    'Operation',
    'SecurityType',
    'Request',
    'RequestBuilder',
    'with_recv_window',
    'with_header',
    'with_headers',
    'WithdrawalQuestionnaire',
    'DepositQuestionnaire',
    'CreateTravelRuleWithdrawResponse',
    'ProvideTravelRuleDepositInfoResponse',
    'TravelRuleDeposit',
    'CreateTravelRuleWithdrawService',
    'ListTravelRuleDepositsService',
    'ProvideTravelRuleDepositInfoService',
    'TravelRuleError',
    'ValidationError',
    'SerializationError',
    'TransportError',
    'APIError',
    'DecodingError',
    'setup_logging',
]
