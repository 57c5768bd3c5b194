"""Pytest fixtures for travelrule tests."""
import json
from unittest.mock import AsyncMock, Mock

import pytest

from travelrule import DepositQuestionnaire, WithdrawalQuestionnaire

FIXED_TIMESTAMP = 1700000000000


@pytest.fixture
def transport():
    """Fake transport returning an empty JSON object."""
    fake = Mock()
    fake.call_api = AsyncMock(return_value=b'{}')
    fake.timestamp = Mock(return_value=FIXED_TIMESTAMP)
    return fake


@pytest.fixture
def withdrawal_questionnaire():
    """Questionnaire for a withdraw to another VASP."""
    return WithdrawalQuestionnaire(
        is_address_owner=2,
        bnf_type=0,
        bnf_name='Jane Doe',
        country='FR',
        send_to=2,
        vasp='VASP_CODE_1',
        declaration=True
    )


@pytest.fixture
def deposit_questionnaire():
    """Questionnaire for a deposit received from a private wallet."""
    return DepositQuestionnaire(
        deposit_originator=1,
        receive_from=1,
        declaration=True
    )


@pytest.fixture
def sample_deposits():
    """Two deposit history entries as returned by the exchange."""
    return [
        {
            'trId': 765127651,
            'tranId': 4544306426,
            'amount': '0.0012',
            'coin': 'BTC',
            'network': 'BTC',
            'depositStatus': 1,
            'travelRuleStatus': 0,
            'address': 'bc1qxyz',
            'addressTag': '',
            'txId': '0xabc',
            'insertTime': 1715940000000,
            'transferType': 0,
            'confirmTimes': '2/2',
            'unlockConfirm': 1,
            'walletType': 0,
            'requireQuestionnaire': False,
            'questionnaire': {'depositOriginator': 1, 'receiveFrom': 2, 'vasp': 'OTHER'}
        },
        {
            'trId': 765127652,
            'tranId': 4544306427,
            'amount': '15.5',
            'coin': 'USDT',
            'network': 'TRX',
            'depositStatus': 0,
            'travelRuleStatus': 1,
            'address': 'TXyz',
            'addressTag': '12345',
            'txId': '0xdef',
            'insertTime': 1715941000000,
            'transferType': 0,
            'confirmTimes': '0/20',
            'unlockConfirm': 20,
            'walletType': 1,
            'requireQuestionnaire': True,
            'questionnaire': None
        },
    ]


@pytest.fixture
def sample_deposits_body(sample_deposits):
    return json.dumps(sample_deposits).encode()
