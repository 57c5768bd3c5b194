"""Travel rule endpoints: questionnaires, results and request builders."""
from .models import (
    WithdrawalQuestionnaire,
    DepositQuestionnaire,
    TravelRuleResult,
    CreateTravelRuleWithdrawResponse,
    ProvideTravelRuleDepositInfoResponse,
    TravelRuleDeposit,
)
from .services import (
    CreateTravelRuleWithdrawService,
    ListTravelRuleDepositsService,
    ProvideTravelRuleDepositInfoService,
)

__all__ = [
    'WithdrawalQuestionnaire',
    'DepositQuestionnaire',
    'TravelRuleResult',
    'CreateTravelRuleWithdrawResponse',
    'ProvideTravelRuleDepositInfoResponse',
    'TravelRuleDeposit',
    'CreateTravelRuleWithdrawService',
    'ListTravelRuleDepositsService',
    'ProvideTravelRuleDepositInfoService',
]
