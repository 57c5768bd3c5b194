"""
Travel rule data models.

Questionnaires are the compliance records attached to a withdraw or a
deposit. Result records mirror the JSON returned by the localentity
endpoints.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional
import json

from ..api.request import read_field
from ..exceptions import ValidationError


def _require(data: Any, key: str) -> Any:
    if not isinstance(data, dict):
        raise ValidationError(f"Questionnaire must be a JSON object, got {type(data).__name__}")
    if key not in data:
        raise ValidationError(f"Questionnaire is missing {key!r}", field=key)
    return data[key]


@dataclass
class WithdrawalQuestionnaire:
    """
    Beneficiary information sent with a withdraw.

    Attributes:
        is_address_owner: 1 if the sender owns the destination address, 2 otherwise
        bnf_type: Beneficiary type (0 individual, 1 corporate)
        bnf_name: Beneficiary name (individual)
        country: Beneficiary country (ISO 3166-1 alpha-2)
        bnf_corp_name: Beneficiary corporate name
        bnf_corp_country: Beneficiary corporate country
        send_to: Destination kind (1 private wallet, 2 another VASP)
        vasp: VASP code of the destination exchange
        vasp_name: Free-form VASP name when the code is not listed
        declaration: Sender confirms the information is accurate
    """
    is_address_owner: int
    send_to: int
    declaration: bool
    bnf_type: Optional[int] = None
    bnf_name: Optional[str] = None
    country: Optional[str] = None
    bnf_corp_name: Optional[str] = None
    bnf_corp_country: Optional[str] = None
    vasp: Optional[str] = None
    vasp_name: Optional[str] = None

    # Wire order; optional keys are omitted when unset
    _KEYS = (
        ('isAddressOwner', 'is_address_owner'),
        ('bnfType', 'bnf_type'),
        ('bnfName', 'bnf_name'),
        ('country', 'country'),
        ('bnfCorpName', 'bnf_corp_name'),
        ('bnfCorpCountry', 'bnf_corp_country'),
        ('sendTo', 'send_to'),
        ('vasp', 'vasp'),
        ('vaspName', 'vasp_name'),
        ('declaration', 'declaration'),
    )
    _REQUIRED = ('isAddressOwner', 'sendTo', 'declaration')

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON object sent to the exchange."""
        result = {}
        for key, attr in self._KEYS:
            value = getattr(self, attr)
            if value is None and key not in self._REQUIRED:
                continue
            result[key] = value
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WithdrawalQuestionnaire':
        """
        Create from a JSON object.

        Raises:
            ValidationError: If a required key is missing
        """
        for key in cls._REQUIRED:
            _require(data, key)
        return cls(**{attr: data.get(key) for key, attr in cls._KEYS})

    def to_json(self) -> str:
        """Serialize to compact JSON."""
        return json.dumps(self.to_dict(), separators=(',', ':'))

    @classmethod
    def from_json(cls, json_str: str) -> 'WithdrawalQuestionnaire':
        """Create from a JSON string."""
        return cls.from_dict(json.loads(json_str))


@dataclass
class DepositQuestionnaire:
    """
    Originator information provided for a received deposit.

    Every key is sent; unset optional fields go out as ``null``.
    """
    deposit_originator: int
    receive_from: int
    declaration: bool
    org_type: Optional[int] = None
    org_name: Optional[str] = None
    country: Optional[str] = None
    corp_name: Optional[str] = None
    corp_country: Optional[str] = None
    vasp: Optional[str] = None
    vasp_name: Optional[str] = None

    _KEYS = (
        ('depositOriginator', 'deposit_originator'),
        ('orgType', 'org_type'),
        ('orgName', 'org_name'),
        ('country', 'country'),
        ('corpName', 'corp_name'),
        ('corpCountry', 'corp_country'),
        ('receiveFrom', 'receive_from'),
        ('vasp', 'vasp'),
        ('vaspName', 'vasp_name'),
        ('declaration', 'declaration'),
    )
    _REQUIRED = ('depositOriginator', 'receiveFrom', 'declaration')

    def to_dict(self) -> Dict[str, Any]:
        return {key: getattr(self, attr) for key, attr in self._KEYS}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DepositQuestionnaire':
        for key in cls._REQUIRED:
            _require(data, key)
        return cls(**{attr: data.get(key) for key, attr in cls._KEYS})

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(',', ':'))

    @classmethod
    def from_json(cls, json_str: str) -> 'DepositQuestionnaire':
        return cls.from_dict(json.loads(json_str))


@dataclass
class TravelRuleResult:
    """Acknowledgement returned when questionnaire information is submitted."""
    id: int
    accepted: bool
    info: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        return cls(
            id=read_field(data, 'trId', int, 0),
            accepted=read_field(data, 'accepted', bool, False),
            info=read_field(data, 'info', str, ''),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {'trId': self.id, 'accepted': self.accepted, 'info': self.info}


class CreateTravelRuleWithdrawResponse(TravelRuleResult):
    """Result of a travel rule withdraw submission."""


class ProvideTravelRuleDepositInfoResponse(TravelRuleResult):
    """Result of providing questionnaire information for a deposit."""


@dataclass
class TravelRuleDeposit:
    """
    Deposit record with its travel rule status.

    ``questionnaire`` holds the submitted questionnaire verbatim; its shape
    depends on the local entity, so it is kept as a plain dict.
    """
    tr_id: int
    tran_id: int
    amount: str
    coin: str
    network: str
    deposit_status: int
    travel_rule_status: int
    address: str
    address_tag: str
    tx_id: str
    insert_time: int
    transfer_type: int
    confirm_times: str
    unlock_confirm: int
    wallet_type: int
    require_questionnaire: bool
    questionnaire: Optional[Dict[str, Any]] = None

    _FIELDS = (
        ('trId', 'tr_id', int, 0),
        ('tranId', 'tran_id', int, 0),
        ('amount', 'amount', str, ''),
        ('coin', 'coin', str, ''),
        ('network', 'network', str, ''),
        ('depositStatus', 'deposit_status', int, 0),
        ('travelRuleStatus', 'travel_rule_status', int, 0),
        ('address', 'address', str, ''),
        ('addressTag', 'address_tag', str, ''),
        ('txId', 'tx_id', str, ''),
        ('insertTime', 'insert_time', int, 0),
        ('transferType', 'transfer_type', int, 0),
        ('confirmTimes', 'confirm_times', str, ''),
        ('unlockConfirm', 'unlock_confirm', int, 0),
        ('walletType', 'wallet_type', int, 0),
        ('requireQuestionnaire', 'require_questionnaire', bool, False),
        ('questionnaire', 'questionnaire', dict, None),
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TravelRuleDeposit':
        """
        Create from a deposit history entry.

        Raises:
            DecodingError: If a field has the wrong JSON type
        """
        return cls(**{
            attr: read_field(data, key, kind, default)
            for key, attr, kind, default in cls._FIELDS
        })

    def to_dict(self) -> Dict[str, Any]:
        return {key: getattr(self, attr) for key, attr, _, _ in self._FIELDS}

    @property
    def pending_questionnaire(self) -> bool:
        """True while the deposit still waits for questionnaire information."""
        return self.require_questionnaire and not self.questionnaire
